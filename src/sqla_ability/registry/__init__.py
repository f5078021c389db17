"""Ability registry — declaration, lookup and resolution of detectors."""

from sqla_ability.registry._ability import Ability, Declare, attach, new_ability
from sqla_ability.registry._attach import AbilityCheck, get_attached_ability
from sqla_ability.registry._spec import ResourceSpec

__all__ = [
    "Ability",
    "AbilityCheck",
    "Declare",
    "ResourceSpec",
    "attach",
    "get_attached_ability",
    "new_ability",
]
