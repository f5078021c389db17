"""Layered configuration for sqla-ability."""

from __future__ import annotations

from dataclasses import dataclass

from sqla_ability._types import OnDuplicate

__all__ = [
    "AbilityConfig",
    "configure",
    "get_global_config",
    "_reset_global_config",
    "_set_global_config",
]

_VALID_ON_DUPLICATE: set[str] = {"replace", "warn", "raise"}


@dataclass(frozen=True, slots=True)
class AbilityConfig:
    """Configuration with merge semantics (global -> per-ability).

    Attributes:
        on_duplicate: Behavior when a detector is declared for an
            ``(resource, action)`` pair that already has one.
            ``"replace"`` silently keeps the newest detector.
            ``"warn"`` keeps the newest detector and emits a warning.
            ``"raise"`` raises ``DuplicateDetectorError`` and keeps the old one.
        log_decisions: Log every completed check to the ``sqla_ability``
            logger.

    Example::

        config = AbilityConfig(on_duplicate="raise")
        merged = config.merge(log_decisions=True)
    """

    on_duplicate: OnDuplicate = "replace"
    log_decisions: bool = False

    def __post_init__(self) -> None:
        if self.on_duplicate not in _VALID_ON_DUPLICATE:
            raise ValueError(
                f"on_duplicate must be one of {_VALID_ON_DUPLICATE!r}, got {self.on_duplicate!r}"
            )

    def merge(
        self,
        *,
        on_duplicate: OnDuplicate | None = None,
        log_decisions: bool | None = None,
    ) -> AbilityConfig:
        """Return a new config with non-None overrides applied.

        Args:
            on_duplicate: Override for on_duplicate (ignored if None).
            log_decisions: Override for log_decisions (ignored if None).

        Returns:
            A new ``AbilityConfig`` with overrides merged.
        """
        return AbilityConfig(
            on_duplicate=on_duplicate if on_duplicate is not None else self.on_duplicate,
            log_decisions=log_decisions if log_decisions is not None else self.log_decisions,
        )


# ---------------------------------------------------------------------------
# Global configuration singleton
# ---------------------------------------------------------------------------

_global_config = AbilityConfig()


def get_global_config() -> AbilityConfig:
    """Return the current global configuration.

    Example::

        config = get_global_config()
        print(config.on_duplicate)  # "replace"
    """
    return _global_config


def configure(
    *,
    on_duplicate: OnDuplicate | None = None,
    log_decisions: bool | None = None,
) -> AbilityConfig:
    """Update the global configuration by merging overrides.

    Only non-None values are applied. Abilities created without an explicit
    config pick the change up on their next call.

    Args:
        on_duplicate: Set to ``"replace"``, ``"warn"`` or ``"raise"``.
        log_decisions: Enable/disable logging of check decisions.

    Returns:
        The updated global ``AbilityConfig``.

    Example::

        configure(on_duplicate="raise")
        # Redeclaring an action now raises DuplicateDetectorError
    """
    global _global_config
    _global_config = _global_config.merge(
        on_duplicate=on_duplicate,
        log_decisions=log_decisions,
    )
    return _global_config


def _set_global_config(cfg: AbilityConfig) -> None:
    """Replace global config with an exact snapshot. For testing only."""
    global _global_config
    _global_config = cfg


def _reset_global_config() -> None:
    """Reset global config to defaults. For testing only."""
    global _global_config
    _global_config = AbilityConfig()
