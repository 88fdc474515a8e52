"""Training periodization phase detection and effectiveness scoring.

Labels a weekly training series with macrocycle phases (base, build, peak,
taper, recovery, transition), scores how well the block was periodized and
flags training risks.
"""

from periodization_engine.detector import PhaseDetector
from periodization_engine.engine import PeriodizationEngine

__all__ = ["PeriodizationEngine", "PhaseDetector"]
