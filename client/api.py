"""
HTTP source of search suggestions for the client-side debouncer.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

import requests

REQUEST_TIMEOUT = 10  # seconds


@dataclass(frozen=True)
class Suggestion:
    id: int
    name: str
    description: Optional[str] = None
    category: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Suggestion":
        return cls(
            id=data["id"],
            name=data["name"],
            description=data.get("description"),
            category=data.get("category"),
        )


class SuggestionApi:
    """Calls `GET /api/search` off the event loop."""

    def __init__(
        self,
        base_url: str = "http://localhost:3000",
        api_prefix: str = "/api",
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.search_url = f"{base_url.rstrip('/')}{api_prefix}/search"
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_sync(self, text: str) -> list[Suggestion]:
        response = self.session.get(
            self.search_url, params={"q": text}, timeout=self.timeout
        )
        response.raise_for_status()
        return [Suggestion.from_dict(row) for row in response.json()]

    async def __call__(self, text: str) -> list[Suggestion]:
        return await asyncio.to_thread(self.fetch_sync, text)
