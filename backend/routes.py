"""
HTTP routes for the search suggestions and the sheets proxy.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from backend.credentials import CredentialProvider
from backend.db import ItemStore
from backend.dependencies import (
    get_credential_provider,
    get_item_store,
    get_sheets_client,
)
from backend.results import to_response
from backend.schemas import ErrorResponse, ItemResponse, SheetValuesResponse
from backend.services import run_search, run_sheets_proxy
from backend.sheets import SheetsClient

router = APIRouter()


@router.get(
    "/search",
    response_model=list[ItemResponse],
    responses={500: {"model": ErrorResponse}},
)
async def search(
    q: str | None = Query(None, description="Partial text, at least 2 characters"),
    store: ItemStore = Depends(get_item_store),
):
    """
    Predictive suggestions: up to five items whose name or description
    contains `q`.
    """
    return to_response(await run_search(store, q))


@router.get(
    "/sheets/{spreadsheet_id}/{sheet_range}",
    responses={
        200: {"model": SheetValuesResponse},
        500: {"model": ErrorResponse},
    },
)
async def get_sheet_values(
    spreadsheet_id: str,
    sheet_range: str,
    provider: CredentialProvider = Depends(get_credential_provider),
    client: SheetsClient = Depends(get_sheets_client),
):
    """
    Proxy a Sheets `values.get` call using the server's service account.
    """
    return to_response(
        await run_sheets_proxy(provider, client, spreadsheet_id, sheet_range)
    )
