import importlib
import logging

import pytest

import factorium.units.registry as regmod
from factorium.units.registry import _bootstrap_default_registry


@pytest.fixture()
def fresh_registry():
    return _bootstrap_default_registry()


def test__get_default_registry_returns_DEFAULT(monkeypatch, fresh_registry):
    # Patch the DEFAULT_REGISTRY and verify the helper returns it
    monkeypatch.setattr(regmod, "DEFAULT_REGISTRY", fresh_registry, raising=True)

    # Import the private helper from the package module
    import factorium.units as units
    get_default = getattr(units, "_get_default_registry")

    assert get_default() is fresh_registry


def test_lazy_u_binds_to_default_registry(monkeypatch, fresh_registry):
    # When DEFAULT_REGISTRY is patched, accessing `factorium.units.u` should
    # lazily resolve to a UnitNamespace bound to that registry.
    monkeypatch.setattr(regmod, "DEFAULT_REGISTRY", fresh_registry, raising=True)

    from factorium.units import u
    # UnitNamespace has an internal _reg reference to the registry
    assert hasattr(u, "_reg")
    assert u._reg is fresh_registry

    # Sanity: attribute access flows through to the registry
    assert u.m.factor is fresh_registry.get("m")


def test_package_level_u_matches_units_u():
    import factorium
    from factorium.units import u
    assert factorium.u.km == u.km


def test_unknown_module_attribute_raises_attributeerror():
    import factorium.units as units
    with pytest.raises(AttributeError):
        _ = getattr(units, "definitely_not_a_public_attr")

    import factorium
    with pytest.raises(AttributeError):
        _ = getattr(factorium, "definitely_not_a_public_attr")


def test_dir_includes_u():
    import factorium.units as units
    names = dir(units)
    assert "u" in names
    # Should be sorted for better discoverability
    assert names == sorted(names)

    import factorium
    assert "u" in dir(factorium)


def test_package_metadata():
    import factorium
    assert isinstance(factorium.__version__, str)
    assert factorium.__license__ == "MIT"
    assert set(factorium.__all__) >= {"Factor", "Units", "ValueWithUnits", "Result"}


def test_package_logger_is_silent_by_default():
    import factorium
    handlers = logging.getLogger("factorium").handlers
    assert any(isinstance(h, logging.NullHandler) for h in handlers)


def test_bootstrap_logs_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="factorium.units.registry"):
        _bootstrap_default_registry()
    assert any("bootstrapped units registry" in r.getMessage() for r in caplog.records)


def test_reload_keeps_catalog_consistent():
    import factorium.units.catalog as catalog
    reloaded = importlib.reload(catalog)
    assert reloaded.KILOGRAM == reloaded.KILO * reloaded.GRAM

def test_package_u_is_served_by_units_package(monkeypatch, fresh_registry):
    monkeypatch.setattr(regmod, "DEFAULT_REGISTRY", fresh_registry, raising=True)
    import factorium
    import factorium.units as units
    assert factorium.u._reg is fresh_registry
    assert units.u._reg is factorium.u._reg
    assert not hasattr(factorium, "_get_default_registry")

def test_registry_names_resolve_lazily_from_units():
    import factorium.units as units
    assert units.UnitsRegistry is regmod.UnitsRegistry
    assert units.DEFAULT_REGISTRY is regmod.DEFAULT_REGISTRY
    assert units.normalize_symbol(" m ") == "m"
    assert {"UnitNamespace", "DEFAULT_REGISTRY"} <= set(dir(units))
