"""
factorium.units
===============

The unit catalog, the unit-expression parser and the registry that ties them
together. Importing the package is cheap: the default registry is bootstrapped
the first time ``u`` or one of the registry names is looked up.

>>> from factorium.units import u
>>> (36 * u("km/h")).to(u("m/s")).value
10
"""
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:  # pragma: no cover - typing aid only
    from factorium.units.registry import UnitsRegistry

# served from factorium.units.registry on first access
_REGISTRY_EXPORTS = ("DEFAULT_REGISTRY", "UnitsRegistry", "UnitNamespace", "normalize_symbol")


def _get_default_registry() -> "UnitsRegistry":
    from factorium.units import registry
    return registry.DEFAULT_REGISTRY


def __getattr__(name: str) -> Any:
    """Resolve ``u`` and the registry exports lazily.

    ``u`` is a fresh namespace over whatever ``DEFAULT_REGISTRY`` is at the
    time of access.
    """
    if name == "u":
        return _get_default_registry().as_namespace()
    if name in _REGISTRY_EXPORTS:
        from factorium.units import registry
        return getattr(registry, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


def __dir__() -> list[str]:
    return sorted({*globals(), "u", *_REGISTRY_EXPORTS})
