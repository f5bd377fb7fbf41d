# src/content_auditor/dom/registry.py
import importlib
import pkgutil
import logging
from typing import Dict, Callable, Optional, Type

from .core import ElementDefinition, Node

logger = logging.getLogger(__name__)


class DOMRegistry:
    """
    Central registry for typed DOM elements and their parsers.

    Dynamically discovers and loads ElementDefinition modules from the
    'content_auditor.dom.elements' package. Tags without a definition are
    built as plain Node instances by the DOMBuilder.
    """

    _parsers: Dict[str, Callable] = {}
    _models: Dict[str, Type[Node]] = {}
    _loaded: bool = False

    @classmethod
    def discover(cls) -> None:
        """
        Discovers and registers all element definitions found in the 'content_auditor.dom.elements' package.

        Every module exposing a `DEFINITION` attribute (instance of `ElementDefinition`)
        registers its parser for each of the tag names it declares.
        """
        if cls._loaded:
            return

        try:
            # Import the elements package to iterate over its modules
            import content_auditor.dom.elements as elements_pkg

            for _, name, _ in pkgutil.iter_modules(elements_pkg.__path__):
                full_name = f"content_auditor.dom.elements.{name}"
                try:
                    module = importlib.import_module(full_name)
                    if hasattr(module, "DEFINITION") and isinstance(module.DEFINITION, ElementDefinition):
                        defn = module.DEFINITION
                        for tag_name in defn.tag_names:
                            cls._parsers[tag_name] = defn.parser
                            cls._models[tag_name] = defn.model
                        logger.debug(f"Element definition loaded: {', '.join(defn.tag_names)}")
                except Exception as e:
                    logger.error(f"Error loading module {name}: {e}")

            cls._loaded = True
        except ImportError as e:
            logger.error(f"Could not find elements package: {e}")

    @classmethod
    def get_parser(cls, tag_name: str) -> Optional[Callable]:
        """Retrieves the parser function for a specific HTML tag."""
        return cls._parsers.get(tag_name)

    @classmethod
    def get_model(cls, tag_name: str) -> Optional[Type[Node]]:
        return cls._models.get(tag_name)

    @classmethod
    def as_model(cls, node: Node) -> Node:
        """
        Returns the node as its registered element model. Plain nodes that were
        not built by the DOMBuilder are upgraded; their children are shared.
        """
        model = cls.get_model(node.tag)
        if model is None or isinstance(node, model):
            return node
        return model(tag=node.tag, attrs=node.attrs, text=node.text, children=node.children)
