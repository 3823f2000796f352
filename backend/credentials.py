"""
Service account credentials for the Google Sheets proxy.

The private key stays on the server. Each proxy request resolves the
configured material and exchanges a freshly signed, short-lived JWT for a
read-only access token; nothing is cached between requests.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional

import google.auth.transport.requests
from google.auth import exceptions as google_auth_exceptions
from google.oauth2 import service_account

from backend.config import Settings
from backend.errors import CredentialsUnavailable, UpstreamFailure

logger = logging.getLogger(__name__)

SHEETS_READONLY_SCOPE = "https://www.googleapis.com/auth/spreadsheets.readonly"
READONLY_SCOPES = frozenset(
    {
        SHEETS_READONLY_SCOPE,
        "https://www.googleapis.com/auth/drive.readonly",
    }
)
DEFAULT_TOKEN_URI = "https://oauth2.googleapis.com/token"
TOKEN_REQUEST_TIMEOUT = 30  # seconds
KEY_ERROR_MESSAGE = "Service account key could not be used to sign a token."
TRANSPORT_ERROR_MESSAGE = "Token endpoint could not be reached."


def normalize_private_key(value: str) -> str:
    """Turn literal `\\n` sequences (single-line env storage) into line breaks."""
    return value.replace("\\n", "\n")


@dataclass(frozen=True)
class ServiceAccountConfig:
    client_email: Optional[str] = None
    private_key: Optional[str] = field(default=None, repr=False)
    token_uri: str = DEFAULT_TOKEN_URI

    @classmethod
    def from_settings(cls, settings: Settings) -> "ServiceAccountConfig":
        key = settings.google_private_key
        return cls(
            client_email=settings.google_service_account_email,
            private_key=key.get_secret_value() if key is not None else None,
            token_uri=settings.google_token_uri,
        )


@dataclass(frozen=True)
class CredentialMaterial:
    client_email: str
    private_key: str = field(repr=False)
    token_uri: str = DEFAULT_TOKEN_URI

    def as_service_account_info(self) -> dict:
        return {
            "type": "service_account",
            "client_email": self.client_email,
            "private_key": self.private_key,
            "token_uri": self.token_uri,
        }


@dataclass(frozen=True)
class SignedAssertion:
    token: str = field(repr=False)
    expiry: Optional[datetime.datetime] = None

    @property
    def authorization_header(self) -> str:
        return f"Bearer {self.token}"


class TimeoutRequest(google.auth.transport.requests.Request):
    """Transport for the token exchange that always sends a timeout."""

    def __init__(self, timeout: float = TOKEN_REQUEST_TIMEOUT, session=None):
        super().__init__(session=session)
        self.timeout = timeout

    def __call__(self, url, method="GET", body=None, headers=None, timeout=None, **kwargs):
        return super().__call__(
            url,
            method=method,
            body=body,
            headers=headers,
            timeout=timeout or self.timeout,
            **kwargs,
        )


class CredentialProvider:
    """Resolves service account material and signs per-request assertions."""

    def __init__(
        self,
        config: ServiceAccountConfig,
        timeout: float = TOKEN_REQUEST_TIMEOUT,
        request_factory: Optional[Callable[[], object]] = None,
    ):
        self.config = config
        self.timeout = timeout
        self._request_factory = request_factory or (lambda: TimeoutRequest(self.timeout))

    def resolve(self) -> CredentialMaterial:
        """
        Returns the configured material.

        Raises:
            CredentialsUnavailable: If the email or the private key is missing.
        """
        email = (self.config.client_email or "").strip()
        key = self.config.private_key or ""
        if not email or not key.strip():
            raise CredentialsUnavailable(
                "GOOGLE_SERVICE_ACCOUNT_EMAIL and GOOGLE_PRIVATE_KEY must both be set"
            )
        return CredentialMaterial(
            client_email=email,
            private_key=normalize_private_key(key),
            token_uri=self.config.token_uri,
        )

    def sign_assertion(
        self,
        material: CredentialMaterial,
        scope: str = SHEETS_READONLY_SCOPE,
        request=None,
    ) -> SignedAssertion:
        """
        Signs a JWT with the private key and exchanges it for an access token.

        Only read-only scopes are accepted. Key or token endpoint failures are
        raised as UpstreamFailure.
        """
        if scope not in READONLY_SCOPES:
            raise ValueError(f"Refusing to sign for non read-only scope: {scope}")

        try:
            credentials = service_account.Credentials.from_service_account_info(
                material.as_service_account_info(), scopes=[scope]
            )
            credentials.refresh(request or self._request_factory())
        except google_auth_exceptions.RefreshError as exc:
            raise UpstreamFailure(401, _refresh_error_message(exc)) from exc
        except google_auth_exceptions.TransportError as exc:
            logger.warning("Token exchange transport error: %s", exc)
            raise UpstreamFailure(500, TRANSPORT_ERROR_MESSAGE) from exc
        except (ValueError, google_auth_exceptions.GoogleAuthError) as exc:
            # Key parsing detail stays in the server log.
            logger.error("Service account key rejected: %s", type(exc).__name__)
            raise UpstreamFailure(500, KEY_ERROR_MESSAGE) from exc

        return SignedAssertion(token=credentials.token, expiry=credentials.expiry)


def _refresh_error_message(exc: google_auth_exceptions.RefreshError) -> str:
    if len(exc.args) > 1 and isinstance(exc.args[1], dict):
        body = exc.args[1]
        return body.get("error_description") or body.get("error") or str(exc.args[0])
    return str(exc)
