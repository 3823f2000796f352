"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from backend.config import get_settings
from backend.credentials import CredentialProvider, ServiceAccountConfig
from backend.db import InMemoryItemStore, ItemStore, SqlItemStore
from backend.sheets import SheetsClient

_item_store: ItemStore | None = None
_sheets_client: SheetsClient | None = None


def get_item_store() -> ItemStore:
    """
    Return the process-wide row store, opened on first use.
    """
    global _item_store
    if _item_store:
        return _item_store

    settings = get_settings()
    if settings.use_in_memory_backends:
        _item_store = InMemoryItemStore()
    else:
        _item_store = SqlItemStore(settings.database_url)
    return _item_store


def close_item_store() -> None:
    global _item_store
    if isinstance(_item_store, SqlItemStore):
        _item_store.dispose()
    _item_store = None


def get_credential_provider() -> CredentialProvider:
    """
    Built per request so configuration changes are picked up by the next call.
    """
    settings = get_settings()
    return CredentialProvider(
        ServiceAccountConfig.from_settings(settings),
        timeout=settings.sheets_request_timeout,
    )


def get_sheets_client() -> SheetsClient:
    global _sheets_client
    if _sheets_client:
        return _sheets_client

    settings = get_settings()
    _sheets_client = SheetsClient(
        base_url=settings.sheets_api_base_url,
        timeout=settings.sheets_request_timeout,
    )
    return _sheets_client
