"""
modreload Test Configuration and Fixtures

Keeps every test isolated from the caller's environment and from config
files lying around the working directory.
"""

import pytest

from modreload.bootstrap.config import reset_config
from modreload.dependencies import ModuleDescriptor, descriptors_from_mapping


ENV_VARS = [
    "MODRELOAD_SORT_STRATEGY",
    "MODRELOAD_INCLUDE_EXTERNAL",
    "MODRELOAD_LOG_LEVEL",
    "MODRELOAD_LOG_FORMAT",
    "MODRELOAD_LOG_FILE",
    "MODRELOAD_JSON_LOGS",
]


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Clean env, empty cwd, no cached global config."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def chain_mapping():
    """a <- b <- c (c requires b, b requires a)."""
    return {
        "a": frozenset(),
        "b": frozenset({"a"}),
        "c": frozenset({"b"}),
    }


@pytest.fixture
def diamond_mapping():
    """d requires b and c, both of which require a."""
    return {
        "a": frozenset(),
        "b": frozenset({"a"}),
        "c": frozenset({"a"}),
        "d": frozenset({"b", "c"}),
    }


@pytest.fixture
def app_descriptors():
    """A small application with one external dependency."""
    return descriptors_from_mapping({
        "app.core": [],
        "app.db": ["app.core", "ext.driver"],
        "app.api": ["app.db", "app.core"],
        "app.cli": ["app.api"],
        "app.docs": [],
    })


@pytest.fixture
def self_loop_descriptor():
    return ModuleDescriptor(id="loop", requires={"loop"})
