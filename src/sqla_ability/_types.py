"""Shared types and type aliases for sqla-ability."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Generic, Literal, NamedTuple, TypeVar, Union

__all__ = [
    "Decision",
    "Detector",
    "Immediate",
    "OnDuplicate",
    "Pending",
    "ResourceAction",
]

T = TypeVar("T")

# Valid values for AbilityConfig.on_duplicate.
OnDuplicate = Literal["replace", "warn", "raise"]

# A detector receives the subject first and the target second and returns
# a decision value, or an awaitable resolving to one.
Detector = Callable[[Any, Any], Union[object, Awaitable[object]]]


class ResourceAction(NamedTuple):
    """Composite key identifying one detector binding.

    Example::

        key = ResourceAction("posts", "update")
        assert key.resource == "posts"
    """

    resource: str
    action: str

    def __str__(self) -> str:
        return f"{self.resource}.{self.action}"


@dataclass(frozen=True, slots=True)
class Immediate(Generic[T]):
    """A decision the detector produced synchronously."""

    value: T


@dataclass(frozen=True, slots=True)
class Pending(Generic[T]):
    """A decision that is still being computed.

    ``awaitable`` is the coroutine or future the detector returned. It must
    be awaited exactly once to obtain the decision value.
    """

    awaitable: Awaitable[T]


# The result of invoking a detector, before any awaiting happens.
Decision = Union[Immediate[Any], Pending[Any]]
