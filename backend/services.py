"""
Request-level operations behind the HTTP routes.

Each operation returns an EndpointResult instead of raising, so the route
handlers only translate results into responses.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi.concurrency import run_in_threadpool

from backend.credentials import CredentialProvider
from backend.db import MAX_SUGGESTIONS, MIN_QUERY_LENGTH, ItemStore
from backend.errors import CredentialsUnavailable, InternalStoreError, UpstreamFailure
from backend.results import EndpointResult, Err, Ok
from backend.sheets import SheetsClient

logger = logging.getLogger(__name__)

SEARCH_ERROR = "Internal server error"
CREDENTIALS_ERROR = "Google Service Account credentials not configured on server."
CREDENTIALS_DETAILS = (
    "Please ensure GOOGLE_SERVICE_ACCOUNT_EMAIL and GOOGLE_PRIVATE_KEY are set."
)
UPSTREAM_ERROR = "Failed to fetch data from Google Sheets."
UNEXPECTED_UPSTREAM_MESSAGE = "Unexpected error while contacting Google Sheets."


def is_searchable(query: Optional[str]) -> bool:
    return bool(query) and len(query.strip()) >= MIN_QUERY_LENGTH


async def run_search(store: ItemStore, query: Optional[str]) -> EndpointResult:
    if not is_searchable(query):
        return Ok([])

    try:
        items = await run_in_threadpool(store.search, query, MAX_SUGGESTIONS)
    except InternalStoreError:
        logger.exception("Search error for query of length %d", len(query))
        return Err(500, SEARCH_ERROR)
    except Exception:
        logger.exception("Unexpected search error")
        return Err(500, SEARCH_ERROR)
    return Ok([item.as_dict() for item in items[:MAX_SUGGESTIONS]])


async def run_sheets_proxy(
    provider: CredentialProvider,
    client: SheetsClient,
    spreadsheet_id: str,
    sheet_range: str,
) -> EndpointResult:
    try:
        material = provider.resolve()
    except CredentialsUnavailable as exc:
        logger.error("Sheets proxy not configured: %s", exc)
        return Err(500, CREDENTIALS_ERROR, details=CREDENTIALS_DETAILS)

    try:
        assertion = await run_in_threadpool(provider.sign_assertion, material)
        payload = await run_in_threadpool(
            client.fetch_range, assertion, spreadsheet_id, sheet_range
        )
    except UpstreamFailure as exc:
        logger.warning(
            "Sheets proxy error for %s (%s): %s %s",
            spreadsheet_id,
            sheet_range,
            exc.status_code,
            exc.message,
        )
        return Err(exc.status_code, UPSTREAM_ERROR, message=exc.message)
    except Exception:
        logger.exception("Unexpected sheets proxy error")
        return Err(500, UPSTREAM_ERROR, message=UNEXPECTED_UPSTREAM_MESSAGE)
    return Ok(payload)
