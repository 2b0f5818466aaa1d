"""Organization installation discovery."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Protocol

from github_app_orgs.github.client import Installation
from github_app_orgs.host import ActionHost


class InstallationLister(Protocol):
    def list_installations(self) -> list[Installation]: ...


def describe_installation(installation: Installation) -> str:
    account = installation.account
    login = (account.login if account else None) or "null"
    account_type = (account.type if account else None) or "null"
    return f"  - ID: {installation.id}, Account: {login}, Type: {account_type}"


def organization_logins(installations: Sequence[Installation]) -> list[str]:
    """Logins of organization-owned installations, in input order."""

    return [
        installation.account.login
        for installation in installations
        if installation.account is not None
        and installation.account.is_organization
        and installation.account.login is not None
    ]


async def get_organization_installations(
    client: InstallationLister, host: ActionHost
) -> list[str]:
    """Return the logins of every organization the App is installed on.

    Only the first page GitHub returns is considered. Errors from the listing
    call propagate unchanged.
    """

    installations = await asyncio.to_thread(client.list_installations)

    host.info(f"Found {len(installations)} total installations")

    if host.is_debug():
        host.debug("Installation details:")
        for installation in installations:
            host.debug(describe_installation(installation))

    org_names = organization_logins(installations)

    host.info(f"Found {len(org_names)} organization installations")
    return org_names
