#!/usr/bin/env python3
"""
Reloading relationships of SQLAlchemy models.

This example demonstrates:
- Loading logging and traversal options from etc/relreload.yaml
- Opting models into recursive reload with the Reloadable mixin
- Picking up rows another session committed after the instance was loaded
- Timing each relationship reload with observability hooks

Requires the aiosqlite driver:
    pip install -e ".[test]"

Usage:
    python examples/01_sqlalchemy/reload_author.py
    RELRELOAD_LOGGING_LEVEL=trace python examples/01_sqlalchemy/reload_author.py
"""

import asyncio
import pathlib
import sys
import tempfile

# Add the project root to the path
project_root = pathlib.Path(__file__).resolve().parents[2]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from sqlalchemy import ForeignKey, String
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
    selectinload,
)

from relreload import (
    Config,
    HookContext,
    HookEvent,
    LogConfig,
    LoggerFactory,
    ObservabilityHooks,
    Reloadable,
    ReloadOptions,
    reload_relationships,
)
from relreload.sqla import SQLAlchemyAdapter


class Base(DeclarativeBase):
    pass


class Author(Base, Reloadable):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    books: Mapped[list["Book"]] = relationship(
        back_populates="author", order_by="Book.id"
    )


class Book(Base, Reloadable):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(200))
    author_id: Mapped[int | None] = mapped_column(ForeignKey("authors.id"))
    author: Mapped["Author | None"] = relationship(back_populates="books")


async def run(db_path: pathlib.Path) -> int:
    config = Config(project_root / "etc" / "relreload.yaml")
    lg = LoggerFactory.create_root(LogConfig.from_config(config))
    options = ReloadOptions.from_config(config)

    hooks = ObservabilityHooks(lg)

    @hooks.on(HookEvent.RELATIONSHIP_RELOADED)
    def report(ctx: HookContext) -> None:
        lg.info(
            "relationship timing",
            extra={
                "model": ctx.model_key,
                "relationship": ctx.relationship,
                "ms": f"{(ctx.duration or 0) * 1000:.1f}",
            },
        )

    engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    sessions = async_sessionmaker(engine, expire_on_commit=False)

    async with sessions() as session:
        session.add(Author(id=1, name="Le Guin", books=[Book(id=1, title="Lathe")]))
        await session.commit()

    async with sessions() as session:
        author = await session.get(Author, 1, options=[selectinload(Author.books)])
        lg.info("loaded", extra={"books": [b.title for b in author.books]})

        async with sessions() as other:
            other.add(Book(id=2, title="The Dispossessed", author_id=1))
            await other.commit()

        adapter = SQLAlchemyAdapter(lg, session)
        await reload_relationships(
            author, adapter, lg=lg, options=options, hooks=hooks
        )
        lg.info("reloaded", extra={"books": [b.title for b in author.books]})

    await engine.dispose()
    return 0


def main() -> int:
    with tempfile.TemporaryDirectory() as tmp:
        return asyncio.run(run(pathlib.Path(tmp) / "library.db"))


if __name__ == "__main__":
    sys.exit(main())
