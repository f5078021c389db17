"""Import fixtures from sqla_ability.testing for test discovery."""

from sqla_ability.testing._fixtures import (
    ability_config,
    ability_registry,
    isolated_ability_state,
)

__all__ = ["ability_config", "ability_registry", "isolated_ability_state"]
