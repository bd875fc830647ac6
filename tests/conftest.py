# tests/conftest.py
import pytest
from factorium.units.registry import DEFAULT_REGISTRY as _ureg
from factorium.units.registry import _bootstrap_default_registry


@pytest.fixture(scope="session")
def ureg():
    return _ureg

@pytest.fixture
def reg():
    # fresh registry per test so registrations never leak into DEFAULT_REGISTRY
    return _bootstrap_default_registry()

@pytest.fixture
def ns(reg):
    return reg.as_namespace()
