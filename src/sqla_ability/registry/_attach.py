"""Attach an Ability's check entry points onto a model class."""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sqla_ability.registry._ability import Ability

__all__ = ["ABILITY_ATTR", "AbilityCheck", "get_attached_ability", "install"]

# Attribute under which a model holds its attached Ability.
ABILITY_ATTR = "__ability__"


class AbilityCheck:
    """Descriptor forwarding to the Ability attached to the owning class.

    Accessed on the class it is ``Ability.check`` itself; accessed on an
    instance the instance is supplied as the subject::

        await User.check(me, "view", me)
        await me.check("view", them)   # same as User.check(me, "view", them)

    The Ability is read from the class at access time, so re-attaching a
    model swaps the rules every entry point uses.
    """

    def __get__(self, instance: object | None, owner: type) -> Callable[..., Any]:
        ability = get_attached_ability(owner)
        if instance is None:
            return ability.check
        return functools.partial(ability.check, instance)


def get_attached_ability(model: type) -> Ability:
    """Return the Ability attached to *model*.

    Raises:
        AttributeError: If nothing was attached to *model* or its bases.
    """
    ability = getattr(model, ABILITY_ATTR, None)
    if ability is None:
        raise AttributeError(f"No ability attached to {model.__name__}")
    return ability


def install(model: type, ability: Ability, *, name: str = "check") -> None:
    """Store *ability* on *model* and expose it as the *name* entry point."""
    setattr(model, ABILITY_ATTR, ability)
    setattr(model, name, AbilityCheck())
