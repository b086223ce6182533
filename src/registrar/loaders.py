"""Loader strategies that turn a component type into a registered instance.

A loader is looked up by the fully-qualified name of its class, so every
loader a component may name must be constructible without arguments. The
built-in :class:`DefaultLoader` simply calls the component's zero-argument
constructor; custom loaders may do anything else (inject dependencies, pool
instances, hand the class to a framework) as long as they report failure by
returning rather than raising.
"""

from abc import ABC, abstractmethod
from typing import Any

from registrar.domain import TypeRef
from registrar.logging import get_logger

__all__ = ["Loader", "DefaultLoader"]

logger = get_logger(__name__)


class Loader(ABC):
    """Strategy used to register instances of component types."""

    @abstractmethod
    def register_class(self, type_ref: TypeRef) -> Any:
        """Register the given component type.

        Args:
            type_ref: The component type to register.

        Returns:
            The registered instance, or None if registration failed.

        Example:
            >>> class PooledLoader(Loader):
            ...     def register_class(self, type_ref):
            ...         return pool.setdefault(type_ref, type_ref.target())
        """


class DefaultLoader(Loader):
    """Constructs components through their zero-argument constructor."""

    def register_class(self, type_ref: TypeRef) -> Any:
        logger.info("component_registering", component=type_ref.name)
        try:
            instance = type_ref.target()
        except Exception:
            logger.warning(
                "component_registration_failed", component=type_ref.name, exc_info=True
            )
            return None
        logger.info("component_registered", component=type_ref.name)
        return instance
