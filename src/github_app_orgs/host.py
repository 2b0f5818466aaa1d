"""Access to the GitHub Actions runner.

Every component receives an :class:`ActionHost` explicitly instead of reading
the environment or logging globally, so tests can substitute a recording
double.
"""

from __future__ import annotations

import logging
import os
import uuid
from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path

from github_app_orgs.config import ActionSettings
from github_app_orgs.errors import ConfigurationError

logger = logging.getLogger(__name__)


class ActionHost(ABC):
    """Capabilities the runner provides to a single action invocation."""

    @abstractmethod
    def get_input(self, name: str, *, required: bool = False) -> str:
        """Return the trimmed value of an action input.

        Raises:
            ConfigurationError: If ``required`` and the input is missing or empty.
        """

    @abstractmethod
    def set_output(self, name: str, value: str) -> None:
        """Publish a step output."""

    @abstractmethod
    def set_failed(self, message: str) -> None:
        """Report the run as failed with a human readable message."""

    @abstractmethod
    def info(self, message: str) -> None:
        pass

    @abstractmethod
    def debug(self, message: str) -> None:
        pass

    @abstractmethod
    def is_debug(self) -> bool:
        pass


def input_env_names(name: str) -> tuple[str, str]:
    """Environment variable names an input may arrive under.

    The runner keeps hyphens (``INPUT_APP-ID``); shells cannot export those,
    so the underscore form (``INPUT_APP_ID``) is accepted as a fallback.
    """

    runner_name = f"INPUT_{name.replace(' ', '_').upper()}"
    return runner_name, runner_name.replace("-", "_")


class RunnerHost(ActionHost):
    """Host backed by the real runner environment.

    Args:
        settings: Runner settings (debug flag, output file).
        environ: Source of ``INPUT_*`` variables; defaults to ``os.environ``.
        log: Logger used for info/debug/failure messages.
    """

    def __init__(
        self,
        settings: ActionSettings,
        *,
        environ: Mapping[str, str] | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._settings = settings
        self._environ = os.environ if environ is None else environ
        self._log = log or logger
        self.exit_code = 0

    def get_input(self, name: str, *, required: bool = False) -> str:
        value = ""
        for env_name in input_env_names(name):
            value = self._environ.get(env_name, "")
            if value:
                break

        value = value.strip()
        if required and not value:
            raise ConfigurationError(f"Input required and not supplied: {name}")
        return value

    def set_output(self, name: str, value: str) -> None:
        output_file = self._settings.github_output
        if output_file is None:
            # Runners without GITHUB_OUTPUT still honour the deprecated command.
            print(f"::set-output name={name}::{value}", flush=True)
            return
        _append_output(output_file, name, value)

    def set_failed(self, message: str) -> None:
        self.exit_code = 1
        self._log.error(message)

    def info(self, message: str) -> None:
        self._log.info(message)

    def debug(self, message: str) -> None:
        self._log.debug(message)

    def is_debug(self) -> bool:
        return self._settings.runner_debug


def _append_output(path: Path, name: str, value: str) -> None:
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"Unexpected input: output value contains the delimiter {delimiter}")

    with path.open("a", encoding="utf-8") as fh:
        fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
