"""Exception hierarchy for sqla-ability."""

from __future__ import annotations

from sqla_ability._types import ResourceAction

__all__ = [
    "AbilityError",
    "AuthorizationDenied",
    "DetectorError",
    "DuplicateDetectorError",
    "InvalidDeclarationError",
    "NameResolutionError",
    "UnknownActionError",
    "UnknownResourceError",
]


class AbilityError(Exception):
    """Base exception for all sqla-ability errors."""


class NameResolutionError(AbilityError):
    """A value could not be mapped to a resource name.

    Attributes:
        value: The value that failed to resolve.
    """

    def __init__(self, *, value: object, message: str | None = None) -> None:
        self.value = value
        if message is None:
            message = f"Cannot resolve a resource name from {value!r}"
        super().__init__(message)


class UnknownResourceError(AbilityError):
    """No detectors were ever declared for the resource.

    This indicates a missing ``declare`` call, not a denial.

    Attributes:
        resource: The resolved resource name.

    Example::

        try:
            await ability.check(user, "read", "comments")
        except UnknownResourceError as exc:
            print(f"nothing declared for {exc.resource}")
    """

    def __init__(self, *, resource: str) -> None:
        self.resource = resource
        super().__init__(f"No detectors declared for resource {resource!r}")


class UnknownActionError(AbilityError):
    """The resource is known but has no detector for the action.

    Attributes:
        resource: The resolved resource name.
        action: The requested action.
        key: The ``(resource, action)`` pair as a ``ResourceAction``.
    """

    def __init__(self, *, resource: str, action: str) -> None:
        self.resource = resource
        self.action = action
        self.key = ResourceAction(resource, action)
        super().__init__(f"No detector declared for ({resource!r}, {action!r})")


class DetectorError(AbilityError):
    """A detector raised, or its pending computation failed.

    The underlying exception is available as ``cause`` and is also chained
    as ``__cause__``.

    Attributes:
        resource: The resolved resource name.
        action: The requested action.
        cause: The original exception.
    """

    def __init__(self, *, resource: str, action: str, cause: BaseException) -> None:
        self.resource = resource
        self.action = action
        self.cause = cause
        super().__init__(
            f"Detector for ({resource!r}, {action!r}) failed: {type(cause).__name__}: {cause}"
        )


class InvalidDeclarationError(AbilityError):
    """A declaration was malformed.

    Raised for a missing or non-callable detector, an empty resource
    name, or an empty action list.
    """


class DuplicateDetectorError(AbilityError):
    """A detector is already bound to the ``(resource, action)`` pair.

    Only raised when ``on_duplicate="raise"`` is configured; the default
    behavior replaces the previous detector.

    Attributes:
        resource: The resolved resource name.
        action: The action that was already bound.
    """

    def __init__(self, *, resource: str, action: str) -> None:
        self.resource = resource
        self.action = action
        super().__init__(f"A detector is already declared for ({resource!r}, {action!r})")


class AuthorizationDenied(AbilityError):  # noqa: N818
    """Subject is not permitted to perform the action on the target.

    Attributes:
        subject: The subject that was denied.
        action: The action that was attempted.
        resource: The resolved resource name.

    Example::

        try:
            await ability.authorize(user, "delete", post)
        except AuthorizationDenied as exc:
            print(f"{exc.subject} cannot {exc.action} {exc.resource}")
    """

    def __init__(
        self,
        *,
        subject: object,
        action: str,
        resource: str,
        message: str | None = None,
    ) -> None:
        self.subject = subject
        self.action = action
        self.resource = resource
        if message is None:
            message = f"Subject {subject!r} is not permitted to {action} {resource}"
        super().__init__(message)
