"""Action input resolution."""

from __future__ import annotations

from dataclasses import dataclass

from github_app_orgs.host import ActionHost
from github_app_orgs.keys import normalize_private_key

APP_ID_INPUT = "app-id"
PRIVATE_KEY_INPUT = "private-key"


@dataclass(frozen=True, slots=True)
class Credential:
    """GitHub App identity and its signing key."""

    app_id: str
    private_key: str

    def __repr__(self) -> str:
        return f"Credential(app_id={self.app_id!r}, private_key='***')"


def get_inputs(host: ActionHost) -> Credential:
    """Read and validate the required inputs.

    Inputs are checked in order (``app-id`` then ``private-key``), so the
    error names the first one missing.

    Raises:
        ConfigurationError: If either input is missing or empty.
    """

    app_id = host.get_input(APP_ID_INPUT, required=True)
    private_key = host.get_input(PRIVATE_KEY_INPUT, required=True)

    return Credential(app_id=app_id, private_key=normalize_private_key(private_key, host=host))
