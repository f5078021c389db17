"""Pytest fixtures for testing sqla-ability detectors."""

from __future__ import annotations

from collections.abc import Generator

import pytest

from sqla_ability.config._config import AbilityConfig
from sqla_ability.registry._ability import Ability
from sqla_ability.testing._isolation import isolated_ability_config

__all__ = ["ability_config", "ability_registry", "isolated_ability_state"]


@pytest.fixture()
def ability_registry() -> Ability:
    """Provide a fresh, empty ``Ability`` for each test.

    Example::

        def test_my_detector(ability_registry):
            ability_registry.declare("view", User, is_active)
            assert ability_registry.has_detector(User, "view")
    """
    return Ability()


@pytest.fixture()
def ability_config() -> AbilityConfig:
    """Provide a default ``AbilityConfig``."""
    return AbilityConfig()


@pytest.fixture()
def isolated_ability_state() -> Generator[AbilityConfig, None, None]:
    """Reset the global config to defaults for the test and restore it after."""
    with isolated_ability_config() as config:
        yield config
