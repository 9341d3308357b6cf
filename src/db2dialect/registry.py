"""
Explicit adapter registry.

Nothing registers itself on import. Callers own a ``DialectRegistry`` and
decide what goes in it, usually via ``register_db2`` which first checks that
the DB2 driver can be imported.
"""

from __future__ import annotations

import importlib.util
from typing import Callable, Dict, Iterator

from .adapters.base import DatabaseAdapter
from .adapters.db2 import DRIVER_MODULE, DB2Adapter
from .utils import get_logger

AdapterFactory = Callable[[], DatabaseAdapter]

logger = get_logger("registry")


class RegistryError(RuntimeError):
    """Raised for duplicate or unknown registry entries."""


class DialectRegistry:
    """
    Maps engine names (``"db2"``) to adapter factories.
    """

    def __init__(self) -> None:
        self._factories: Dict[str, AdapterFactory] = {}

    def register(self, name: str, factory: AdapterFactory, *, available: bool) -> bool:
        """
        Register ``factory`` under ``name`` when ``available`` is true.

        Returns whether the entry was added.
        """
        if not available:
            logger.info("Skipping registration of '%s': driver not available", name)
            return False
        if name in self._factories:
            raise RegistryError(f"Adapter '{name}' is already registered.")
        self._factories[name] = factory
        logger.debug("Registered adapter '%s'", name)
        return True

    def unregister(self, name: str) -> None:
        self._factories.pop(name, None)

    def create(self, name: str) -> DatabaseAdapter:
        try:
            factory = self._factories[name]
        except KeyError:
            raise RegistryError(f"No adapter registered under '{name}'.") from None
        return factory()

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._factories))

    def clear(self) -> None:
        self._factories.clear()


def driver_available(module: str = DRIVER_MODULE) -> bool:
    """
    Check whether the driver module can be imported, without importing it.
    """
    try:
        return importlib.util.find_spec(module) is not None
    except (ImportError, ValueError):
        return False


def register_db2(registry: DialectRegistry, factory: AdapterFactory = DB2Adapter) -> bool:
    return registry.register("db2", factory, available=driver_available())
