"""
Bootstrap data for the item table.

Runs once at startup and only inserts rows when the table is empty.
"""

from __future__ import annotations

import logging
from typing import Sequence, Union

from backend.db import InMemoryItemStore, ItemRow, SqlItemStore

logger = logging.getLogger(__name__)

SEED_ITEMS: Sequence[tuple[str, str, str]] = (
    ("Apple iPhone 15", "Latest smartphone from Apple", "Electronics"),
    ("Samsung Galaxy S23", "High-end Android smartphone", "Electronics"),
    ("Sony WH-1000XM5", "Noise-canceling headphones", "Audio"),
    ("MacBook Pro 14", "Powerful laptop for professionals", "Computing"),
    ("Dell XPS 13", "Compact and powerful ultrabook", "Computing"),
    ("Nintendo Switch", "Hybrid gaming console", "Gaming"),
    ("PlayStation 5", "Next-gen gaming console", "Gaming"),
    ("Logitech MX Master 3S", "Ergonomic productivity mouse", "Accessories"),
    ("Keychron K2", "Mechanical wireless keyboard", "Accessories"),
    ("Kindle Paperwhite", "E-reader for book lovers", "Electronics"),
)


def seed_items_if_empty(
    store: Union[SqlItemStore, InMemoryItemStore],
    items: Sequence[tuple[str, str | None, str | None]] = SEED_ITEMS,
) -> int:
    """Insert `items` when the store holds no rows. Returns the inserted count."""
    if store.count() > 0:
        return 0

    if isinstance(store, InMemoryItemStore):
        for name, description, category in items:
            store.add(name, description, category)
    else:
        with store.Session() as session:
            session.add_all(
                [
                    ItemRow(name=name, description=description, category=category)
                    for name, description, category in items
                ]
            )
            session.commit()
    logger.info("Seeded %d items", len(items))
    return len(items)
