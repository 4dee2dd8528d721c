"""
Pytest fixtures for SQLAlchemy integration testing.

Runs an async engine on a file-backed SQLite database (aiosqlite) so that
separate sessions see each other's committed rows, which is what reload
tests need: one session changes the database, the other reloads.

Usage:
    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_reload(session_factory, seeded):
        async with session_factory() as session:
            author = await session.get(Author, 1)
            ...
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import ForeignKey, String
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from relreload.interface import Reloadable

# =============================================================================
# Models
# =============================================================================


class Base(DeclarativeBase):
    pass


class Publisher(Base):
    """Not reloadable: reloaded as a related instance but never descended into."""

    __tablename__ = "publishers"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))


class Author(Base, Reloadable):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    books: Mapped[list[Book]] = relationship(
        back_populates="author", order_by="Book.id"
    )


class Book(Base, Reloadable):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    author_id: Mapped[int | None] = mapped_column(ForeignKey("authors.id"))
    publisher_id: Mapped[int | None] = mapped_column(ForeignKey("publishers.id"))

    author: Mapped[Author | None] = relationship(back_populates="books")
    publisher: Mapped[Publisher | None] = relationship()


# =============================================================================
# Engine and Session Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """
    Create an async SQLite engine with all tables created.

    Yields:
        AsyncEngine bound to a database file in tmp_path
    """
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'relreload.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(sqlite_engine: AsyncEngine) -> async_sessionmaker:
    """Session factory keeping instances usable after commit."""
    return async_sessionmaker(sqlite_engine, expire_on_commit=False)


@pytest_asyncio.fixture
async def seeded(session_factory: async_sessionmaker) -> None:
    """
    Insert one publisher, one author and two books.

    publishers: 1 "Tor"
    authors:    1 "Le Guin"
    books:      1 "Lathe" (author 1, publisher 1), 2 "Dispossessed" (author 1)
    """
    async with session_factory() as session:
        publisher = Publisher(id=1, name="Tor")
        author = Author(id=1, name="Le Guin")
        session.add_all(
            [
                publisher,
                author,
                Book(id=1, title="Lathe", author=author, publisher=publisher),
                Book(id=2, title="Dispossessed", author=author),
            ]
        )
        await session.commit()
