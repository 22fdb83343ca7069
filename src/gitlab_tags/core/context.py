"""Application context with dependency injection."""

import logging
import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import cached_property

from gitlab_tags.core.config import GlobalConfig, apply_env_overrides
from gitlab_tags.gateway.config_store.abc import ConfigStore
from gitlab_tags.gateway.config_store.fake import FakeConfigStore
from gitlab_tags.gateway.config_store.real import RealConfigStore
from gitlab_tags.gateway.gitlab.gateway import GitLabGateway, create_real_gitlab_gateway
from gitlab_tags.gateway.http.auth import fetch_gitlab_token
from gitlab_tags.gateway.http.real import RealHttpClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GitLabContext:
    """Immutable context holding all dependencies for gltags operations.

    Created at CLI entry point and threaded through the application via
    click.Context.obj. The GitLab gateway is built on first use, so commands
    that never talk to the server (config) work without a token.
    """

    global_config: GlobalConfig
    config_store: ConfigStore
    gitlab_factory: Callable[[], GitLabGateway] = field(repr=False)
    project_override: str | None = None

    @cached_property
    def gitlab(self) -> GitLabGateway:
        return self.gitlab_factory()

    @property
    def project(self) -> str | None:
        """Project to operate on: --project, else the configured default."""
        if self.project_override:
            return self.project_override
        return self.global_config.default_project

    @staticmethod
    def for_test(
        *,
        gitlab: GitLabGateway | None = None,
        global_config: GlobalConfig | None = None,
        config_store: ConfigStore | None = None,
        project_override: str | None = None,
    ) -> "GitLabContext":
        """Create a context wired with fakes.

        Args:
            gitlab: Gateway to use (defaults to create_fake_gitlab_gateway())
            global_config: Config (defaults to GlobalConfig() with
                default_project "test-group/test-project")
            config_store: Store (defaults to FakeConfigStore holding global_config)
            project_override: Value of --project
        """
        from gitlab_tags.gateway.gitlab.gateway import create_fake_gitlab_gateway

        resolved_gitlab = gitlab if gitlab is not None else create_fake_gitlab_gateway()
        resolved_config = (
            global_config
            if global_config is not None
            else GlobalConfig(default_project="test-group/test-project")
        )
        return GitLabContext(
            global_config=resolved_config,
            config_store=config_store or FakeConfigStore(config=resolved_config),
            gitlab_factory=lambda: resolved_gitlab,
            project_override=project_override,
        )


def create_context(
    *,
    project_override: str | None = None,
    env: Mapping[str, str] | None = None,
) -> GitLabContext:
    """Create production context with real implementations.

    Args:
        project_override: Project given on the command line, if any
        env: Environment to read overrides from (defaults to os.environ)

    Returns:
        GitLabContext whose gateway talks to the configured GitLab instance

    Example:
        >>> ctx = create_context(project_override="group/project")
        >>> tags = ctx.gitlab.tags.get_tags(ctx.project)
    """
    config_store = RealConfigStore()
    global_config = apply_env_overrides(
        config_store.load_config(), env if env is not None else os.environ
    )

    def build_gitlab() -> GitLabGateway:
        token = global_config.token
        if token is None:
            logger.debug("No token configured, asking glab for %s", global_config.hostname)
            token = fetch_gitlab_token(global_config.hostname)
        http_client = RealHttpClient(
            token=token,
            base_url=global_config.url,
            timeout=global_config.timeout,
        )
        return create_real_gitlab_gateway(http_client, per_page=global_config.per_page)

    return GitLabContext(
        global_config=global_config,
        config_store=config_store,
        gitlab_factory=build_gitlab,
        project_override=project_override,
    )
