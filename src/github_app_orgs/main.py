"""CLI entrypoint and pipeline orchestration.

``run`` is the single place where failures are classified and reported; the
components it calls let errors propagate.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from collections.abc import Callable

from pydantic import ValidationError

from github_app_orgs import __version__
from github_app_orgs.config import ActionSettings
from github_app_orgs.errors import classify_failure
from github_app_orgs.github.client import GitHubAppClient, create_app_client
from github_app_orgs.host import ActionHost, RunnerHost
from github_app_orgs.inputs import get_inputs
from github_app_orgs.installations import get_organization_installations
from github_app_orgs.logging import configure_logging

OUTPUT_NAME = "organizations"

ClientFactory = Callable[[str, str], GitHubAppClient]


def serialize_organizations(organizations: list[str]) -> str:
    """Compact JSON array, e.g. ``["org1","org2"]`` (``[]`` when empty)."""

    return json.dumps(list(organizations), separators=(",", ":"), ensure_ascii=False)


def _close_client(client: GitHubAppClient, host: ActionHost) -> None:
    # A close failure must not mask the outcome of the listing call.
    try:
        client.close()
    except Exception as e:
        host.debug(f"Failed to close GitHub client: {e}")


async def run(host: ActionHost, *, client_factory: ClientFactory | None = None) -> None:
    """Discover organization installations and publish them as an output.

    Args:
        host: Runner capabilities (inputs, outputs, logging, failure signal).
        client_factory: Builds the GitHub client from ``(app_id, private_key)``;
            defaults to :func:`create_app_client`.
    """

    try:
        host.info("Retrieving GitHub App installations...")

        credential = get_inputs(host)

        factory = client_factory or create_app_client
        client = factory(credential.app_id, credential.private_key)
        try:
            organizations = await get_organization_installations(client, host)
        finally:
            _close_client(client, host)

        json_output = serialize_organizations(organizations)
        host.set_output(OUTPUT_NAME, json_output)
        host.info(f"Output: {json_output}")
    except Exception as e:
        host.set_failed(classify_failure(e))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-app-orgs",
        description="List the organizations a GitHub App is installed on",
    )
    parser.add_argument("--version", action="version", version=f"github-app-orgs {__version__}")
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log per-installation details (same as RUNNER_DEBUG=1)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = ActionSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check the runner environment):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    if args.debug:
        settings = settings.model_copy(update={"runner_debug": True})

    configure_logging(settings.log_level, settings.log_format, debug=settings.runner_debug)

    def client_factory(app_id: str, private_key: str) -> GitHubAppClient:
        return create_app_client(app_id, private_key, base_url=settings.github_api_url)

    host = RunnerHost(settings)
    asyncio.run(run(host, client_factory=client_factory))
    return host.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
