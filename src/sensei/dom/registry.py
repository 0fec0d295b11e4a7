# src/sensei/dom/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, List, Set

from .core import ElementDefinition

logger = logging.getLogger(__name__)


class ElementRegistry:
    """
    Central registry for element categories and their audit rules.

    Dynamically discovers and loads ElementDefinition modules from the
    'sensei.dom.elements' package and orders them by their declared position,
    which fixes the order in which element issues are reported.
    """

    _definitions: List[ElementDefinition] = []
    _all_codes: Set[str] = set()
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Discovers and registers all element definitions found in the 'sensei.dom.elements' package.

        Modules without a `DEFINITION` attribute (instance of `ElementDefinition`)
        are skipped. The registry is populated at most once per process.
        """
        if cls._loaded:
            return

        try:
            # Import the elements package to iterate over its modules
            import sensei.dom.elements as elements_pkg
        except ImportError as e:
            logger.error("Could not find elements package: %s", e)
            return

        definitions: List[ElementDefinition] = []
        codes: Set[str] = set()

        for _, name, _ in pkgutil.iter_modules(elements_pkg.__path__):
            full_name = f"sensei.dom.elements.{name}"
            try:
                module = importlib.import_module(full_name)
            except Exception as e:
                logger.error("Error loading module %s: %s", name, e)
                continue

            defn = getattr(module, "DEFINITION", None)
            if isinstance(defn, ElementDefinition):
                definitions.append(defn)
                codes.update(defn.codes)
                logger.debug("Element definition loaded: %s", defn.category)

        # Published in one step; readers never observe a partial list
        cls._definitions = sorted(definitions, key=lambda d: d.position)
        cls._all_codes = codes
        cls._loaded = True

    @classmethod
    def get_definitions(cls) -> List[ElementDefinition]:
        """Returns all element definitions in reporting order."""
        return list(cls._definitions)

    @classmethod
    def get_codes_by_category(cls) -> Dict[str, List[str]]:
        """Maps every element category to the issue codes its rules can emit."""
        return {defn.category: defn.codes for defn in cls._definitions}

    @classmethod
    def get_all_possible_codes(cls) -> List[str]:
        """
        Returns a list of all unique issue codes registered in the system.
        Used by the API to describe the rule catalogue.
        """
        return sorted(list(cls._all_codes))
