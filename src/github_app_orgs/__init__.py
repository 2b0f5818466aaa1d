"""GitHub App organization discovery.

Lists the organizations a GitHub App is installed on and publishes them as a
JSON array output for downstream workflow jobs.
"""

__version__ = "0.1.0"

from github_app_orgs.main import run

__all__ = ["__version__", "run"]
