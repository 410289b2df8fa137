"""Pytest fixtures for tweakpack tests."""

import logging
from collections.abc import Iterator
from types import MappingProxyType

import pytest

from tweakpack.bundle import load_bundle
from tweakpack.configuration import (
    ConfigurationMapping,
    build_configuration_mapping,
    get_configuration_mapping,
)
from tweakpack.foundation.config import reset_config


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path) -> Iterator[None]:
    """Keep app config, env overrides and logging handlers out of each test."""
    for name in (
        "TWEAKPACK_LIMITS_MAX_COMMAND_LENGTH",
        "TWEAKPACK_LIMITS_MAX_SLOTS_PER_TYPE",
        "TWEAKPACK_PATHS_BUNDLE",
        "TWEAKPACK_PATHS_MAPPING",
        "TWEAKPACK_DEBUG",
        "TWEAKPACK_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    level = root.level
    reset_config()
    yield
    reset_config()
    # Drop handlers installed by configure_logging
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def packaged_bundle():
    """The sample bundle shipped with the package."""
    return load_bundle()


@pytest.fixture
def packaged_mapping() -> ConfigurationMapping:
    """The configuration mapping shipped with the package."""
    return get_configuration_mapping()


@pytest.fixture
def small_bundle():
    """A tiny bundle with one plain file and one template."""
    return MappingProxyType({
        "lua/plain.lua": "x = 1",
        "lua/hp.lua": "unitDef.metalcost = unitDef.health * (0.75 / $HP$)",
    })


@pytest.fixture
def small_mapping() -> ConfigurationMapping:
    """A mapping with a baseline and two settings."""
    return build_configuration_mapping({
        "base": {
            "command": ["!preset coop"],
            "tweakdefs": ["~lua/plain.lua"],
        },
        "settings": {
            "difficulty": {
                "values": {
                    "Hard": {"command": ["!bset raptor_difficulty hard"]},
                },
            },
            "raptorHealthMult": {
                "values": {
                    "1.5": {"tweakdefs": ["~lua/hp.lua{HP=1.5}"]},
                    "1": {},
                },
            },
        },
    })
