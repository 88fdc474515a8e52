"""Classifier registry with auto-discovery of PhaseClassifier subclasses."""

from __future__ import annotations

import importlib
import pkgutil
from pathlib import Path

from periodization_engine.classifiers.base import PhaseClassifier


class ClassifierRegistry:
    """Discovers and manages all PhaseClassifier implementations.

    Auto-discovers classifiers by scanning the classifiers/ package for
    concrete subclasses of PhaseClassifier. A new signal is added by
    placing a module in that package and giving it a confidence weight.
    """

    def __init__(self) -> None:
        self._classifiers: dict[str, PhaseClassifier] = {}

    def discover_classifiers(self) -> None:
        """Scan the classifiers package and register all PhaseClassifier subclasses."""
        import periodization_engine.classifiers as classifiers_pkg

        classifiers_path = Path(classifiers_pkg.__file__).parent  # type: ignore[arg-type]
        self._scan_package(classifiers_pkg.__name__, str(classifiers_path))

    def _scan_package(self, package_name: str, package_path: str) -> None:
        """Import all modules under a package and register classifiers."""
        for _importer, module_name, _is_pkg in pkgutil.walk_packages(
            [package_path], prefix=package_name + "."
        ):
            module = importlib.import_module(module_name)
            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if (
                    isinstance(attr, type)
                    and issubclass(attr, PhaseClassifier)
                    and attr is not PhaseClassifier
                    and not getattr(attr, "__abstractmethods__", set())
                ):
                    self.register(attr())

    def register(self, classifier: PhaseClassifier) -> None:
        """Register a classifier instance by its classifier_id."""
        self._classifiers[classifier.classifier_id] = classifier

    def get(self, classifier_id: str) -> PhaseClassifier | None:
        return self._classifiers.get(classifier_id)

    def get_all_classifiers(self) -> list[PhaseClassifier]:
        """Return all registered classifiers in vote order."""
        return sorted(self._classifiers.values(), key=lambda c: (c.vote_order, c.classifier_id))

    @property
    def classifier_ids(self) -> list[str]:
        """Registered classifier IDs in vote order."""
        return [c.classifier_id for c in self.get_all_classifiers()]
