"""Ability — declares detectors and resolves checks against them."""

from __future__ import annotations

import asyncio
import inspect
import warnings
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from sqla_ability._audit import log_check_decision, log_declaration, log_duplicate
from sqla_ability._types import Decision, Detector, Immediate, Pending, ResourceAction
from sqla_ability.config._config import AbilityConfig, get_global_config
from sqla_ability.exceptions import (
    AuthorizationDenied,
    DetectorError,
    DuplicateDetectorError,
    InvalidDeclarationError,
    UnknownActionError,
    UnknownResourceError,
)
from sqla_ability.naming import resolve_name
from sqla_ability.registry._attach import install
from sqla_ability.registry._spec import ResourceSpec

__all__ = ["Ability", "Declare", "attach", "new_ability"]

D = TypeVar("D", bound=Detector)

# The bound ``declare`` handed to setup callbacks.
Declare = Callable[[str | Iterable[str], object, Detector], None]


def _normalize_actions(actions: str | Iterable[str]) -> list[str]:
    action_list = [actions] if isinstance(actions, str) else list(actions)
    if not action_list:
        raise InvalidDeclarationError("At least one action must be declared")
    for action in action_list:
        if not isinstance(action, str) or not action:
            raise InvalidDeclarationError(
                f"Action names must be non-empty strings, got {action!r}"
            )
    return action_list


class Ability:
    """Registry of detectors keyed by resource name and action.

    A detector is any callable taking ``(subject, target)``. It may return
    a value directly or an awaitable (e.g. an ``async def`` that counts
    rows through an ``AsyncSession``); :meth:`check` awaits the latter.

    Declarations are expected to happen up front; the registry is not
    locked against mutation during checks.

    Example::

        ability = Ability(lambda can: can("view", User, lambda me, user: user.active))

        @ability.detector(["update", "delete"], Post)
        async def owns_post(user: User, post: Post) -> int:
            return await session.scalar(
                select(func.count()).select_from(UserPost).where(
                    UserPost.user_id == user.id, UserPost.post_id == post.id
                )
            )

        if await ability.check(current_user, "update", post):
            ...
    """

    #: Name resolver used for every target. Override in a subclass to
    #: support resource types the default heuristic cannot name.
    resolve_name = staticmethod(resolve_name)

    def __init__(
        self,
        setup: Callable[[Declare], object] | None = None,
        *,
        config: AbilityConfig | None = None,
    ) -> None:
        self._specs: dict[str, ResourceSpec] = {}
        self._config = config
        if setup is not None:
            setup(self.declare)

    @property
    def config(self) -> AbilityConfig:
        """The explicit config, or the global config at call time."""
        return self._config if self._config is not None else get_global_config()

    # ------------------------------------------------------------------
    # Declaration
    # ------------------------------------------------------------------

    def declare(self, actions: str | Iterable[str], target: object, detector: Detector) -> None:
        """Bind *detector* to each of *actions* on *target*'s resource.

        Args:
            actions: An action name or a non-empty sequence of them.
            target: A resource name, or a model class the name is
                resolved from. A non-string target is recorded as the
                resource's ``model``.
            detector: Callable taking ``(subject, target)``.

        Raises:
            InvalidDeclarationError: If *detector* is not callable, or the
                resource or an action name is empty.
            DuplicateDetectorError: If ``on_duplicate="raise"`` and one of
                the actions is already bound to another detector.

        Example::

            ability.declare(["update", "delete"], Post, is_author)
        """
        if detector is None or not callable(detector):
            raise InvalidDeclarationError(f"Detector must be callable, got {detector!r}")
        action_list = _normalize_actions(actions)
        name = self.resolve_name(target)
        if not name:
            raise InvalidDeclarationError(f"Resource name resolved from {target!r} is empty")

        config = self.config
        spec = self._specs.get(name)
        if spec is not None and config.on_duplicate == "raise":
            for action in action_list:
                existing = spec.actions.get(action)
                if existing is not None and existing != detector:
                    raise DuplicateDetectorError(resource=name, action=action)

        if spec is None:
            spec = self._specs[name] = ResourceSpec(name=name)
        if not isinstance(target, str):
            spec.model = target

        for action in action_list:
            key = ResourceAction(name, action)
            previous = spec.bind(action, detector)
            if previous is not None and previous != detector and config.on_duplicate == "warn":
                warnings.warn(f"Detector for {key} was redeclared", stacklevel=2)
                log_duplicate(key=key, previous=previous, detector=detector)
            log_declaration(key=key, detector=detector, model=spec.model)

    can = declare

    def detector(self, actions: str | Iterable[str], target: object) -> Callable[[D], D]:
        """Decorator form of :meth:`declare`.

        Example::

            @ability.detector("view", User)
            def is_active(me: User, user: User) -> bool:
                return user.active
        """

        def decorator(fn: D) -> D:
            self.declare(actions, target, fn)
            return fn

        return decorator

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _lookup(self, name: str, action: str) -> Detector:
        spec = self._specs.get(name)
        if spec is None:
            raise UnknownResourceError(resource=name)
        detector = spec.actions.get(action)
        if detector is None:
            raise UnknownActionError(resource=name, action=action)
        return detector

    def lookup(self, target: object, action: str) -> Detector:
        """Return the detector bound to *action* on *target*'s resource.

        Raises:
            NameResolutionError: If *target* has no resource name.
            UnknownResourceError: If nothing is declared for the resource.
            UnknownActionError: If the action is not declared.
        """
        return self._lookup(self.resolve_name(target), action)

    def has_detector(self, target: object, action: str) -> bool:
        """Return ``True`` if a detector is bound for *(target, action)*."""
        spec = self._specs.get(self.resolve_name(target))
        return spec is not None and action in spec.actions

    def get_spec(self, target: object) -> ResourceSpec | None:
        """Return the ``ResourceSpec`` for *target*'s resource, if declared."""
        return self._specs.get(self.resolve_name(target))

    def actions_for(self, target: object) -> tuple[str, ...]:
        """Return the declared action names for *target*, in declaration order."""
        spec = self.get_spec(target)
        return tuple(spec.actions) if spec is not None else ()

    @property
    def resources(self) -> Mapping[str, ResourceSpec]:
        """Read-only view of resource name to ``ResourceSpec``."""
        return MappingProxyType(self._specs)

    def __contains__(self, target: object) -> bool:
        return self.resolve_name(target) in self._specs

    def clear(self) -> None:
        """Remove every declaration. Primarily useful in test teardown."""
        self._specs.clear()

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def _evaluate(
        self, subject: object, action: str, target: object
    ) -> tuple[ResourceAction, Decision]:
        name = self.resolve_name(target)
        detector = self._lookup(name, action)
        try:
            result = detector(subject, target)
        except Exception as exc:
            raise DetectorError(resource=name, action=action, cause=exc) from exc

        key = ResourceAction(name, action)
        if inspect.isawaitable(result):
            return key, Pending(result)
        return key, Immediate(result)

    def evaluate(self, subject: object, action: str, target: object) -> Decision:
        """Invoke the detector without awaiting its result.

        Returns ``Immediate(value)`` for a synchronous detector and
        ``Pending(awaitable)`` when the detector returned an awaitable.
        The caller owns the pending awaitable and must await it.

        Raises:
            NameResolutionError: If *target* has no resource name.
            UnknownResourceError: If nothing is declared for the resource.
            UnknownActionError: If the action is not declared.
            DetectorError: If the detector raised.
        """
        return self._evaluate(subject, action, target)[1]

    async def check(self, subject: object, action: str, target: object) -> Any:
        """Decide whether *subject* may perform *action* on *target*.

        The detector's value is returned as-is, so a detector returning a
        row count yields that count. Use :meth:`allowed` for a strict
        ``bool``.

        Raises:
            NameResolutionError: If *target* has no resource name.
            UnknownResourceError: If nothing is declared for the resource.
            UnknownActionError: If the action is not declared.
            DetectorError: If the detector raised, or its awaitable failed
                or was cancelled.

        Example::

            can_edit = await ability.check(me, "update", post)
        """
        key, decision = self._evaluate(subject, action, target)
        if isinstance(decision, Pending):
            value = await _settle(key, decision)
        else:
            value = decision.value

        if self.config.log_decisions:
            log_check_decision(
                key=key,
                subject=subject,
                pending=isinstance(decision, Pending),
                value=value,
            )
        return value

    async def allowed(self, subject: object, action: str, target: object) -> bool:
        """Like :meth:`check`, coerced to ``bool``."""
        return bool(await self.check(subject, action, target))

    async def authorize(
        self,
        subject: object,
        action: str,
        target: object,
        *,
        message: str | None = None,
    ) -> None:
        """Assert that *subject* may perform *action* on *target*.

        Raises:
            AuthorizationDenied: If the decision is falsy.

        Example::

            await ability.authorize(current_user, "delete", post)  # raises if denied
        """
        if not await self.check(subject, action, target):
            raise AuthorizationDenied(
                subject=subject,
                action=action,
                resource=self.resolve_name(target),
                message=message,
            )

    # ------------------------------------------------------------------
    # Attachment
    # ------------------------------------------------------------------

    @classmethod
    def attach_to(
        cls,
        model: type,
        setup: Callable[[Declare], object] | None = None,
        *,
        name: str = "check",
        config: AbilityConfig | None = None,
    ) -> Ability:
        """Create an Ability and expose its check on *model*.

        After attaching, ``Model.check(subject, action, target)`` and
        ``instance.check(action, target)`` forward to the returned
        Ability, the latter with the instance as subject. The Ability is
        stored on the model as ``Model.__ability__``.

        Example::

            ability = Ability.attach_to(User, lambda can: can("view", User, is_active))
            await me.check("view", them)
        """
        ability = cls(setup, config=config)
        install(model, ability, name=name)
        return ability

    def __repr__(self) -> str:
        return f"<{type(self).__name__} resources={sorted(self._specs)!r}>"


async def _settle(key: ResourceAction, decision: Pending[Any]) -> Any:
    try:
        return await decision.awaitable
    except asyncio.CancelledError as exc:
        task = asyncio.current_task()
        if task is not None and task.cancelling():
            raise
        raise DetectorError(resource=key.resource, action=key.action, cause=exc) from exc
    except Exception as exc:
        raise DetectorError(resource=key.resource, action=key.action, cause=exc) from exc


def new_ability(
    setup: Callable[[Declare], object] | None = None,
    *,
    config: AbilityConfig | None = None,
) -> Ability:
    """Instantiation sugar for :class:`Ability`.

    Example::

        ability = new_ability(lambda can: can("view", "reports", is_staff))
    """
    return Ability(setup, config=config)


def attach(
    model: type,
    setup: Callable[[Declare], object] | None = None,
    *,
    name: str = "check",
    config: AbilityConfig | None = None,
) -> Ability:
    """Module-level alias of :meth:`Ability.attach_to`."""
    return Ability.attach_to(model, setup, name=name, config=config)
