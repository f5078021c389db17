"""sqla-ability testing utilities — mock subjects, assertions and fixtures.

Example::

    from sqla_ability.testing import MockSubject, assert_allowed, make_subject

    async def test_active_users_visible(ability_registry):
        ability_registry.declare("view", MockSubject, lambda me, other: other.active)
        await assert_allowed(ability_registry, make_subject(), "view", make_subject(id=2))
"""

from sqla_ability.testing._assertions import assert_allowed, assert_declared, assert_denied
from sqla_ability.testing._fixtures import (
    ability_config,
    ability_registry,
    isolated_ability_state,
)
from sqla_ability.testing._isolation import isolated_ability_config
from sqla_ability.testing._subjects import MockSubject, make_anonymous, make_subject

__all__ = [
    "MockSubject",
    "ability_config",
    "ability_registry",
    "assert_allowed",
    "assert_declared",
    "assert_denied",
    "isolated_ability_config",
    "isolated_ability_state",
    "make_anonymous",
    "make_subject",
]
