"""Shared test fixtures for sqla-ability tests."""

from __future__ import annotations

from collections.abc import AsyncGenerator, Generator
from dataclasses import dataclass, field

import pytest
import pytest_asyncio
from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from sqla_ability.config._config import _reset_global_config
from sqla_ability.registry._ability import Ability

# ---------------------------------------------------------------------------
# Test models
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    active: Mapped[bool] = mapped_column(Boolean, default=True)


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    content: Mapped[str] = mapped_column(String(200))


class UserPost(Base):
    __tablename__ = "users_posts"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), primary_key=True)
    post_id: Mapped[int] = mapped_column(ForeignKey("posts.id"), primary_key=True)


# ---------------------------------------------------------------------------
# Non-SQLAlchemy resources
# ---------------------------------------------------------------------------


class Invoice:
    """Plain class; resolves by class name."""

    def __init__(self, owner_id: int = 1) -> None:
        self.owner_id = owner_id


@dataclass
class Collection:
    name: str


@dataclass
class Document:
    """Document-store style record carrying its collection."""

    collection: Collection = field(default_factory=lambda: Collection("documents"))
    owner_id: int = 1


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_config() -> Generator[None, None, None]:
    """Keep global config changes from leaking between tests."""
    _reset_global_config()
    yield
    _reset_global_config()


@pytest.fixture()
def ability() -> Ability:
    """Fresh ability per test to avoid cross-test pollution."""
    return Ability()


@pytest_asyncio.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture()
async def async_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    factory = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session
