"""GitHub App API client wrapper.

This wraps PyGithub's ``GithubIntegration`` to keep GitHub calls out of the
pipeline code and make tests easy. PyGithub failures are translated into the
package's typed errors here, at the point where the request is made.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import requests
from github import (
    Auth,
    BadCredentialsException,
    GithubException,
    GithubIntegration,
    RateLimitExceededException,
)

from github_app_orgs.errors import ApiError, AuthenticationError, RateLimitError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.github.com"
ORGANIZATION = "Organization"


@dataclass(frozen=True, slots=True)
class InstallationAccount:
    """The user or organization an installation belongs to."""

    login: str | None
    type: str | None

    @property
    def is_organization(self) -> bool:
        return self.type == ORGANIZATION

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> InstallationAccount:
        login = raw.get("login")
        account_type = raw.get("type")
        return cls(
            login=login if isinstance(login, str) else None,
            type=account_type if isinstance(account_type, str) else None,
        )


@dataclass(frozen=True, slots=True)
class Installation:
    """Minimal installation metadata returned from GitHub."""

    id: int
    account: InstallationAccount | None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> Installation:
        account = raw.get("account")
        return cls(
            id=int(raw["id"]),
            account=InstallationAccount.from_raw(account) if isinstance(account, Mapping) else None,
        )


def _error_message(exc: GithubException) -> str:
    data = exc.data
    if isinstance(data, Mapping):
        message = data.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return str(exc)


class GitHubAppClient:
    """Small wrapper around PyGithub authenticated as a GitHub App.

    Construction only records configuration; nothing is sent to GitHub until
    :meth:`list_installations` is called.
    """

    def __init__(
        self,
        *,
        app_id: str,
        private_key: str,
        base_url: str = DEFAULT_BASE_URL,
        integration: GithubIntegration | None = None,
    ) -> None:
        self._app_id = app_id
        self._base_url = base_url.rstrip("/")

        if integration is not None:
            self._integration = integration
            logger.debug("Using injected GithubIntegration instance")
            return

        auth = Auth.AppAuth(app_id, private_key)
        self._integration = GithubIntegration(auth=auth, base_url=self._base_url)

    @property
    def app_id(self) -> str:
        return self._app_id

    @property
    def base_url(self) -> str:
        return self._base_url

    def list_installations(self) -> list[Installation]:
        """Return the installations in GitHub's first response page.

        Raises:
            AuthenticationError: If GitHub rejects the App JWT.
            RateLimitError: If a rate limit was exceeded.
            ApiError: For any other failed request.
        """

        logger.debug("Listing installations", extra={"app_id": self._app_id})
        try:
            page = self._integration.get_installations().get_page(0)
            return [Installation.from_raw(installation.raw_data) for installation in page]
        except BadCredentialsException as e:
            raise AuthenticationError(_error_message(e)) from e
        except RateLimitExceededException as e:
            raise RateLimitError(_error_message(e)) from e
        except GithubException as e:
            message = _error_message(e)
            if e.status == 401:
                raise AuthenticationError(message) from e
            if e.status in (403, 429) and "rate limit" in message.lower():
                raise RateLimitError(message) from e
            raise ApiError(message) from e
        except requests.RequestException as e:
            raise ApiError(str(e)) from e

    def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        self._integration.close()


def create_app_client(
    app_id: str,
    private_key: str,
    *,
    base_url: str = DEFAULT_BASE_URL,
) -> GitHubAppClient:
    """Build a client that authenticates as the App identified by ``app_id``."""

    return GitHubAppClient(app_id=app_id, private_key=private_key, base_url=base_url)
