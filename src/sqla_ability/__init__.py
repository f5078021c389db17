"""sqla-ability — per-resource, per-action permission rules for SQLAlchemy models.

Detectors are plain or ``async`` callables bound to a (resource, action)
pair. Resources are named after the table a model is mapped to, so a model
class, a model instance and the bare table name all find the same rules.

Example::

    from sqla_ability import Ability

    ability = Ability()

    @ability.detector("update", Post)
    async def can_update(user: User, post: Post) -> int:
        return await session.scalar(
            select(func.count()).select_from(UserPost).where(
                UserPost.user_id == user.id, UserPost.post_id == post.id
            )
        )

    if await ability.check(current_user, "update", post):
        ...
"""

from importlib.metadata import PackageNotFoundError, version

from sqla_ability._types import Decision, Detector, Immediate, Pending, ResourceAction
from sqla_ability.config._config import AbilityConfig, configure
from sqla_ability.exceptions import (
    AbilityError,
    AuthorizationDenied,
    DetectorError,
    DuplicateDetectorError,
    InvalidDeclarationError,
    NameResolutionError,
    UnknownActionError,
    UnknownResourceError,
)
from sqla_ability.naming import resolve_name
from sqla_ability.registry._ability import Ability, attach, new_ability
from sqla_ability.registry._spec import ResourceSpec

try:
    __version__ = version("sqla-ability")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "__version__",
    "Ability",
    "AbilityConfig",
    "AbilityError",
    "AuthorizationDenied",
    "Decision",
    "Detector",
    "DetectorError",
    "DuplicateDetectorError",
    "Immediate",
    "InvalidDeclarationError",
    "NameResolutionError",
    "Pending",
    "ResourceAction",
    "ResourceSpec",
    "UnknownActionError",
    "UnknownResourceError",
    "attach",
    "configure",
    "new_ability",
    "resolve_name",
]
