"""Unit tests for organization installation discovery."""

from __future__ import annotations

import asyncio
import random
from unittest.mock import Mock

import pytest

from github_app_orgs.github.client import Installation, InstallationAccount
from github_app_orgs.host import ActionHost
from github_app_orgs.installations import (
    describe_installation,
    get_organization_installations,
    organization_logins,
)


def _collect(installations: list[Installation], host: ActionHost) -> list[str]:
    client = Mock()
    client.list_installations.return_value = installations
    return asyncio.run(get_organization_installations(client, host))


def test_retrieves_organization_installations(host, org) -> None:
    result = _collect([org(1, "org1"), org(2, "org2")], host)

    assert result == ["org1", "org2"]
    assert host.infos == [
        "Found 2 total installations",
        "Found 2 organization installations",
    ]


def test_filters_mixed_user_and_organization_installations(host, org, user) -> None:
    result = _collect([org(1, "org1"), user(2, "user1"), org(3, "org2"), user(4, "user2")], host)

    assert result == ["org1", "org2"]


def test_returns_empty_list_when_no_installations(host) -> None:
    assert _collect([], host) == []
    assert host.infos == [
        "Found 0 total installations",
        "Found 0 organization installations",
    ]


def test_skips_installations_without_account(host, org, orphan) -> None:
    result = _collect([orphan(1), org(2, "org1"), orphan(3)], host)

    assert result == ["org1"]
    assert "Found 3 total installations" in host.infos
    assert "Found 1 organization installations" in host.infos


def test_listing_is_called_once(host) -> None:
    client = Mock()
    client.list_installations.return_value = []

    asyncio.run(get_organization_installations(client, host))

    client.list_installations.assert_called_once_with()


def test_listing_errors_propagate_unchanged(host) -> None:
    failure = RuntimeError("boom")
    client = Mock()
    client.list_installations.side_effect = failure

    with pytest.raises(RuntimeError) as excinfo:
        asyncio.run(get_organization_installations(client, host))

    assert excinfo.value is failure
    assert host.infos == []


def test_debug_details_are_logged_in_input_order(debug_host, org, user, orphan) -> None:
    _collect([org(1, "org1"), user(2, "user1"), orphan(3)], debug_host)

    assert debug_host.debugs == [
        "Installation details:",
        "  - ID: 1, Account: org1, Type: Organization",
        "  - ID: 2, Account: user1, Type: User",
        "  - ID: 3, Account: null, Type: null",
    ]


def test_debug_details_are_skipped_when_debug_disabled(host, org) -> None:
    _collect([org(1, "org1")], host)

    assert host.debugs == []


def test_describe_installation_substitutes_missing_fields() -> None:
    installation = Installation(id=9, account=InstallationAccount(login=None, type="Organization"))

    assert describe_installation(installation) == "  - ID: 9, Account: null, Type: Organization"


def test_organization_without_login_is_not_emitted() -> None:
    installation = Installation(id=9, account=InstallationAccount(login=None, type="Organization"))

    assert organization_logins([installation]) == []


@pytest.mark.parametrize("seed", range(25))
def test_filtering_matches_ordered_projection(seed: int, make_host, random_installations) -> None:
    installations = random_installations(random.Random(seed))
    host = make_host()

    result = _collect(installations, host)

    expected = [
        i.account.login for i in installations if i.account and i.account.type == "Organization"
    ]
    assert result == expected
    assert len(result) <= len(installations)
    assert len(result) == sum(1 for i in installations if i.account and i.account.is_organization)
    assert host.infos == [
        f"Found {len(installations)} total installations",
        f"Found {len(expected)} organization installations",
    ]


@pytest.mark.parametrize("seed", range(10))
def test_organization_only_input_is_extracted_completely(seed: int, make_host, org) -> None:
    rng = random.Random(seed)
    installations = [org(n, f"org-{rng.randint(0, 10**6)}") for n in range(rng.randint(0, 50))]

    result = _collect(installations, make_host())

    assert len(result) == len(installations)
    for index, installation in enumerate(installations):
        assert result[index] == installation.account.login
