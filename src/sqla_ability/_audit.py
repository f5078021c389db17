"""Audit logging for declarations and check decisions."""

from __future__ import annotations

import logging

from sqla_ability._types import ResourceAction

__all__ = ["log_check_decision", "log_declaration", "log_duplicate"]

logger = logging.getLogger("sqla_ability")


def log_declaration(*, key: ResourceAction, detector: object, model: object | None) -> None:
    """Log a detector binding at DEBUG level."""
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Declared detector %s for %s (model=%r)",
            getattr(detector, "__qualname__", repr(detector)),
            key,
            model,
        )


def log_duplicate(*, key: ResourceAction, previous: object, detector: object) -> None:
    """Log that a binding replaced an earlier detector."""
    logger.warning(
        "Detector for %s redeclared: %s replaces %s",
        key,
        getattr(detector, "__qualname__", repr(detector)),
        getattr(previous, "__qualname__", repr(previous)),
    )


def log_check_decision(
    *,
    key: ResourceAction,
    subject: object,
    pending: bool,
    value: object,
) -> None:
    """Log a completed check.

    Logging levels:
    - INFO: Summary (resource, action, subject, result type)
    - DEBUG: The raw value returned by the detector

    Example::

        log_check_decision(
            key=ResourceAction("posts", "update"),
            subject=current_user,
            pending=True,
            value=1,
        )
    """
    logger.info(
        "Ability check: %s for subject %r — %s%s",
        key,
        subject,
        type(value).__name__,
        " (awaited)" if pending else "",
    )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Detector for %s returned %r", key, value)
