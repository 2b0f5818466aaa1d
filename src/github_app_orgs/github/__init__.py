"""GitHub App API access."""

from github_app_orgs.github.client import (
    GitHubAppClient,
    Installation,
    InstallationAccount,
    create_app_client,
)

__all__ = [
    "GitHubAppClient",
    "Installation",
    "InstallationAccount",
    "create_app_client",
]
