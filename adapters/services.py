"""
Google API service initialization.

Resolves credentials and builds Calendar API service objects.

Services are NOT cached: each parallel fetch builds its own, because
shared httplib2 connections corrupt SSL state under concurrency.

All services use a 60-second timeout to prevent indefinite hangs
when Google APIs are slow or network connections stall.
"""

import os
from pathlib import Path

import google_auth_httplib2
import httplib2
from google.auth.exceptions import RefreshError, TransportError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build, Resource

from logging_config import logger
from models import AlmanacError, AuthenticationRequired, ErrorKind
from oauth_config import ACCESS_TOKEN_ENV, SCOPES, TOKEN_FILE

__all__ = [
    "get_credentials",
    "build_calendar_service",
    "API_TIMEOUT",
]

# Default timeout for all Google API calls (seconds)
API_TIMEOUT = 60


def _load_token_file(token_file: Path) -> Credentials:
    """
    Load authorized-user credentials, refreshing them if expired.

    Raises:
        AuthenticationRequired: Expired with no refresh token, or refresh rejected
        AlmanacError: NETWORK_ERROR if the token endpoint can't be reached
    """
    creds = Credentials.from_authorized_user_file(str(token_file), SCOPES)
    if not creds.expired:
        return creds

    if not creds.refresh_token:
        raise AuthenticationRequired(
            f"Stored credentials in {token_file} have expired and cannot be refreshed. "
            "Re-authenticate with Google Calendar."
        )

    logger.debug(f"Refreshing expired credentials from {token_file}")
    try:
        creds.refresh(google_auth_httplib2.Request(httplib2.Http(timeout=API_TIMEOUT)))
    except RefreshError as e:
        raise AuthenticationRequired(
            f"Stored credentials could not be refreshed ({e}). Re-authenticate with Google Calendar."
        ) from e
    except TransportError as e:
        raise AlmanacError(
            ErrorKind.NETWORK_ERROR,
            f"Could not reach Google to refresh credentials: {e}",
            retryable=True,
        ) from e
    return creds


def get_credentials(
    access_token: str | None = None,
    token_file: Path | None = None,
) -> Credentials:
    """
    Resolve credentials for the Calendar API.

    Order: explicit bearer token, $ALMANAC_ACCESS_TOKEN, token file.

    Raises:
        AuthenticationRequired: If no credential source is available
    """
    token = access_token or os.environ.get(ACCESS_TOKEN_ENV)
    if token:
        return Credentials(token=token)

    token_file = token_file or TOKEN_FILE
    if token_file.exists():
        try:
            return _load_token_file(token_file)
        except ValueError as e:
            # from_authorized_user_file raises ValueError on malformed JSON
            raise AuthenticationRequired(
                f"{token_file} is not a valid token file ({e}). Re-authenticate with Google Calendar."
            ) from e

    raise AuthenticationRequired()


def _get_authorized_http(creds: Credentials) -> google_auth_httplib2.AuthorizedHttp:
    """Create authorized HTTP client with timeout."""
    http = httplib2.Http(timeout=API_TIMEOUT)
    return google_auth_httplib2.AuthorizedHttp(creds, http=http)


def build_calendar_service(credentials: Credentials) -> Resource:
    """Build a fresh Google Calendar API v3 service with its own HTTP connection."""
    return build(
        "calendar", "v3",
        http=_get_authorized_http(credentials),
        cache_discovery=False,
    )
