import pytest

from filmcarbon import load_default_registry


@pytest.fixture(scope="session")
def registry():
    return load_default_registry()
