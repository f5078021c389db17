"""Resource name resolution for strings, model classes and model instances."""

from __future__ import annotations

from sqlalchemy import Table
from sqlalchemy.orm import Mapper, class_mapper, object_mapper
from sqlalchemy.orm.exc import UnmappedClassError, UnmappedInstanceError

from sqla_ability.exceptions import NameResolutionError

__all__ = ["resolve_name"]


def _mapper_for(value: object) -> Mapper | None:
    # Arbitrary values never reach inspect(); for an Engine it connects.
    try:
        if isinstance(value, type):
            return class_mapper(value, configure=False)
        return object_mapper(value)
    except (UnmappedClassError, UnmappedInstanceError):
        return None


def _collection_name(value: object) -> str | None:
    """Return the name of the collection *value* is stored in, if it has one."""
    if isinstance(value, Table):
        return value.name

    mapper = _mapper_for(value)
    if mapper is not None:
        # local_table may be a join or subquery for exotic mappings
        name = getattr(mapper.local_table, "name", None)
        if isinstance(name, str) and name:
            return name

    tablename = getattr(value, "__tablename__", None)
    if isinstance(tablename, str) and tablename:
        return tablename

    collection = getattr(value, "collection", None)
    name = getattr(collection, "name", None)
    if isinstance(name, str) and name:
        return name

    return None


def resolve_name(value: object) -> str:
    """Derive the canonical resource name for *value*.

    Resolution order:

    1. A string is already a resource name and is returned unchanged.
    2. A value carrying collection metadata resolves to that collection's
       name: SQLAlchemy mapped classes and instances (the mapped table),
       ``Table`` objects, anything exposing ``__tablename__`` and anything
       exposing ``collection.name``.
    3. Anything else resolves to its class name (``__name__`` for a class,
       ``type(value).__name__`` for an instance).

    Args:
        value: A resource name, model class or model instance.

    Returns:
        The resource name.

    Raises:
        NameResolutionError: If *value* is ``None``.

    Example::

        resolve_name("posts")       # "posts"
        resolve_name(Post)          # "posts" (Post.__tablename__)
        resolve_name(Post(id=1))    # "posts"
        resolve_name(Invoice)       # "Invoice" (plain class)
    """
    if isinstance(value, str):
        return value
    if value is None:
        raise NameResolutionError(value=value)

    name = _collection_name(value)
    if name is not None:
        return name

    if isinstance(value, type):
        return value.__name__
    return type(value).__name__
