"""
Domain exceptions raised by the row store and the sheets proxy.
"""

from __future__ import annotations

from typing import Optional


class BackendError(Exception):
    pass


class InternalStoreError(BackendError):
    """The row store failed while answering a read query."""

    def __init__(self, message: str = "Row store query failed"):
        super().__init__(message)


class CredentialsUnavailable(BackendError):
    """The service account email or private key is not configured."""


class UpstreamFailure(BackendError):
    """The Google Sheets API (or its token endpoint) rejected or failed a call."""

    def __init__(self, status_code: Optional[int] = None, message: Optional[str] = None):
        super().__init__(message or "Upstream request failed")
        self.status_code = status_code or 500
        self.message = message
