"""
Row store abstraction for the searchable item table.

Provides a SQLAlchemy-backed store (SQLite by default, any SQLAlchemy URL
works) and an in-memory implementation for development and tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from sqlalchemy import Column, Integer, String, create_engine, or_, select
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from backend.errors import InternalStoreError

logger = logging.getLogger(__name__)

MIN_QUERY_LENGTH = 2
MAX_SUGGESTIONS = 5

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def ascii_lower(value: str) -> str:
    """Fold A-Z only, like SQLite lower() and LIKE."""
    return value.translate(_ASCII_LOWER)


class ItemStore(Protocol):
    """Read-only interface the suggestion endpoint needs from the row store."""

    def search(self, text: str, limit: int = MAX_SUGGESTIONS) -> list["Item"]:
        ...


@dataclass(frozen=True)
class Item:
    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
        }


class InMemoryItemStore:
    """Simple in-memory row store for development and tests."""

    def __init__(self, items: Iterable[Item] = ()):
        self.items: list[Item] = sorted(items, key=lambda item: item.id)

    def add(self, name: str, description: str | None, category: str | None) -> Item:
        next_id = self.items[-1].id + 1 if self.items else 1
        item = Item(id=next_id, name=name, description=description, category=category)
        self.items.append(item)
        return item

    def count(self) -> int:
        return len(self.items)

    def search(self, text: str, limit: int = MAX_SUGGESTIONS) -> list[Item]:
        needle = ascii_lower(text)
        results: list[Item] = []
        for item in self.items:
            haystacks = (item.name, item.description or "")
            if any(needle in ascii_lower(value) for value in haystacks):
                results.append(item)
                if len(results) >= limit:
                    break
        return results


class SqlItemStore:
    """
    SQLAlchemy-backed row store. Opened once per process and shared read-only.
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlItemStore")
        url = make_url(database_url)
        engine_kwargs: dict = {"future": True, "pool_pre_ping": True}
        if url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                # One shared connection, otherwise each thread sees an empty db.
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_recycle"] = 1800
        self.engine = create_engine(database_url, **engine_kwargs)
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _to_item(self, row: "ItemRow") -> Item:
        return Item(
            id=row.id,
            name=row.name,
            description=row.description,
            category=row.category,
        )

    def search(self, text: str, limit: int = MAX_SUGGESTIONS) -> list[Item]:
        # autoescape makes %, _ and the escape char in `text` match literally.
        stmt = (
            select(ItemRow)
            .where(
                or_(
                    ItemRow.name.icontains(text, autoescape=True),
                    ItemRow.description.icontains(text, autoescape=True),
                )
            )
            .order_by(ItemRow.id.asc())
            .limit(limit)
        )
        try:
            with self.Session() as session:
                rows = session.execute(stmt).scalars().all()
                return [self._to_item(row) for row in rows]
        except SQLAlchemyError as exc:
            logger.error("Item search failed: %s", exc)
            raise InternalStoreError() from exc

    def count(self) -> int:
        with self.Session() as session:
            return session.query(ItemRow).count()

    def dispose(self) -> None:
        self.engine.dispose()


Base = declarative_base()


class ItemRow(Base):
    __tablename__ = "items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    category = Column(String, nullable=True)
