"""Fold per-week labels into contiguous phase segments.

Segments are week-index ranges ``[start, stop)``. The fold keeps a tuple of
finalized segments plus one pending run; when the label changes the
pending run is closed:

* long enough (>= ``min_phase_weeks``): it becomes a finalized segment;
* too short with a finalized segment before it: its weeks are absorbed by
  that segment, which keeps its own label;
* too short with nothing before it: its weeks are carried into the next
  run so no week is ever dropped.

The final pending run is flushed the same way, or emitted standalone when
it is the only segment.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from functools import partial, reduce

from periodization_engine.models.enums import TrainingPhase


@dataclass(frozen=True)
class PhaseSegment:
    """A labelled run of weeks ``[start, stop)``."""

    phase: TrainingPhase
    start: int
    stop: int

    @property
    def length(self) -> int:
        return self.stop - self.start

    def indices(self) -> range:
        return range(self.start, self.stop)


def absorb(host: PhaseSegment, other: PhaseSegment) -> PhaseSegment:
    """``host`` swallows an adjacent segment and keeps its own label."""
    return PhaseSegment(host.phase, min(host.start, other.start), max(host.stop, other.stop))


def merge(first: PhaseSegment, second: PhaseSegment, phase: TrainingPhase) -> PhaseSegment:
    """Union of two adjacent segments under the given label."""
    return PhaseSegment(phase, min(first.start, second.start), max(first.stop, second.stop))


@dataclass(frozen=True)
class _FoldState:
    finalized: tuple[PhaseSegment, ...] = ()
    pending: PhaseSegment | None = None


def _close(
    finalized: tuple[PhaseSegment, ...], run: PhaseSegment, min_phase_weeks: int
) -> tuple[tuple[PhaseSegment, ...], PhaseSegment | None]:
    """Close a run. Returns the new finalized tuple and any weeks to carry forward."""
    if run.length >= min_phase_weeks:
        return finalized + (run,), None
    if finalized:
        return finalized[:-1] + (absorb(finalized[-1], run),), None
    return finalized, run


def _step(state: _FoldState, item: tuple[int, TrainingPhase], min_phase_weeks: int) -> _FoldState:
    index, label = item
    pending = state.pending
    if pending is None:
        return _FoldState(state.finalized, PhaseSegment(label, index, index + 1))
    if pending.phase == label:
        return _FoldState(state.finalized, PhaseSegment(label, pending.start, index + 1))
    finalized, carry = _close(state.finalized, pending, min_phase_weeks)
    start = carry.start if carry is not None else index
    return _FoldState(finalized, PhaseSegment(label, start, index + 1))


def _flush(state: _FoldState, min_phase_weeks: int) -> tuple[PhaseSegment, ...]:
    pending = state.pending
    if pending is None:
        return state.finalized
    if pending.length >= min_phase_weeks or not state.finalized:
        return state.finalized + (pending,)
    return state.finalized[:-1] + (absorb(state.finalized[-1], pending),)


def segment_labels(
    labels: Sequence[TrainingPhase], min_phase_weeks: int
) -> tuple[PhaseSegment, ...]:
    """Group per-week labels into segments honouring the minimum length.

    Args:
        labels: One consensus label per week, in week order.
        min_phase_weeks: Shortest run that stands as its own segment.

    Returns:
        Segments that partition ``range(len(labels))`` in order.
    """
    step = partial(_step, min_phase_weeks=min_phase_weeks)
    state = reduce(step, enumerate(labels), _FoldState())
    return _flush(state, min_phase_weeks)
