"""qphase_sse: Registry
-------------------

Centralized name -> builder tables, one per namespace, with a factory
interface. Solvers self-register under the ``"solver"`` namespace on import
so configuration files can refer to them by name.

Keys have the form ``"namespace:name"``; names are case-insensitive.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from .errors import QPSRegistryError

__all__ = [
    "RegistryCenter",
    "registry",
    "register",
]

Builder = Callable[..., Any]


@dataclass
class _Entry:
    """Internal record describing a registry entry."""

    builder: Builder
    meta: dict[str, Any] = field(default_factory=dict)


class RegistryCenter:
    """Central registry with factory-style lookup.

    Examples
    --------
    >>> rc = RegistryCenter()
    >>> rc.register("default", "adder", lambda x, y: x + y, return_callable=True)
    >>> add = rc.create("default:adder")
    >>> add(1, 2)
    3

    """

    def __init__(self) -> None:
        self._tables: dict[str, dict[str, _Entry]] = {}

    @staticmethod
    def _split(full_name: str) -> tuple[str, str]:
        if ":" in full_name:
            ns, nm = full_name.split(":", 1)
            return ns.strip().lower(), nm.strip().lower()
        return "default", full_name.strip().lower()

    def register(
        self,
        namespace: str,
        name: str,
        builder: Builder,
        *,
        overwrite: bool = False,
        **meta: Any,
    ) -> None:
        """Register a callable builder under ``namespace:name``.

        Raises
        ------
        QPSRegistryError
            - [400] Duplicate registration when ``overwrite`` is False.

        """
        ns = namespace.strip().lower()
        nm = name.strip().lower()
        table = self._tables.setdefault(ns, {})
        if not overwrite and nm in table:
            raise QPSRegistryError(f"[400] Duplicate registration: {ns}:{nm}")
        full_meta = dict(meta)
        full_meta.setdefault("registered_at", datetime.now(UTC).isoformat())
        full_meta.setdefault(
            "builder_type", "class" if isinstance(builder, type) else "function"
        )
        table[nm] = _Entry(builder=builder, meta=full_meta)

    def decorator(self, namespace: str, name: str, **meta: Any):
        """Return a decorator that registers the object on import."""

        def _wrap(obj: Any):
            self.register(namespace, name, obj, **meta)
            return obj

        return _wrap

    def get(self, full_name: str) -> Builder:
        """Return the registered builder without invoking it.

        Raises
        ------
        QPSRegistryError
            - [404] Unknown registry key.

        """
        ns, nm = self._split(full_name)
        entry = self._tables.get(ns, {}).get(nm)
        if entry is None:
            raise QPSRegistryError(f"[404] Unknown registry key: {ns}:{nm}")
        return entry.builder

    def create(self, full_name: str, /, **kwargs: Any) -> Any:
        """Resolve ``namespace:name`` and construct it with ``kwargs``.

        Entries registered with ``return_callable=True`` are returned as-is.
        """
        ns, nm = self._split(full_name)
        builder = self.get(full_name)
        if self._tables[ns][nm].meta.get("return_callable"):
            return builder
        return builder(**kwargs)

    def list(self, namespace: str | None = None) -> dict[str, Any]:
        """List entries with metadata for one namespace, or names for all."""
        if namespace is None:
            return {ns: sorted(tbl) for ns, tbl in self._tables.items()}
        table = self._tables.get(namespace.strip().lower(), {})
        return {name: dict(e.meta) for name, e in table.items()}


# Global singleton
registry = RegistryCenter()


def register(namespace: str, name: str, **meta: Any):
    """Decorator form registration on the global registry.

    Examples
    --------
    >>> @register("default", "hello")
    ... def hello():
    ...     return "world"

    """
    return registry.decorator(namespace, name, **meta)
