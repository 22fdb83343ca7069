"""GitLab authentication token retrieval.

Tokens normally come from configuration (GITLAB_TOKEN or the config file).
When neither is set, the token stored by the glab CLI is used instead. This is
meant to be called once at startup, not per request.
"""

import logging
import subprocess

logger = logging.getLogger(__name__)


def fetch_gitlab_token(hostname: str = "gitlab.com") -> str:
    """Fetch a GitLab token via the glab CLI.

    Args:
        hostname: GitLab hostname (default: "gitlab.com")

    Returns:
        GitLab access token

    Raises:
        RuntimeError: If glab is missing or the command fails
        ValueError: If the token is empty
    """
    cmd = ["glab", "config", "get", "token", "--host", hostname]
    logger.debug("Executing: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=False)
    except FileNotFoundError as e:
        msg = "glab CLI not found; set GITLAB_TOKEN or add a token to the config file"
        raise RuntimeError(msg) from e

    if result.returncode != 0:
        msg = f"Failed to fetch GitLab token for {hostname}: {result.stderr.strip()}"
        raise RuntimeError(msg)

    token = result.stdout.strip()
    if not token:
        msg = f"Empty token returned from glab for {hostname}"
        raise ValueError(msg)
    return token
