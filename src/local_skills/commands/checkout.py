"""Marketplace and plugin checkouts shared by the commands."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from local_skills.commands.context import ProjectContext
from local_skills.core.errors import RemoteSourceError
from local_skills.core.marketplace import find_plugin, read_marketplace, resolve_plugin_dir
from local_skills.core.models import LocalPluginDir, PluginLocation
from local_skills.core.schemas import MarketplaceConfig
from local_skills.fetch.temp_clone import temp_clone

logger = logging.getLogger(__name__)


class MarketplaceCheckout:
    """A scratch clone of a marketplace at a known commit."""

    def __init__(self, ctx: ProjectContext, clone_dir: Path, sha: str):
        self.ctx = ctx
        self.clone_dir = clone_dir
        self.sha = sha
        self._config: Optional[MarketplaceConfig] = None

    @property
    def config(self) -> MarketplaceConfig:
        """The marketplace manifest, read on first use."""
        if self._config is None:
            self._config = read_marketplace(self.clone_dir)
        return self._config

    def locate(self, plugin_name: str) -> PluginLocation:
        """Find where a plugin's files live.

        Raises:
            PluginNotFoundError: If the marketplace has no such plugin
        """
        plugin = find_plugin(self.config, plugin_name)
        return resolve_plugin_dir(
            plugin, self.clone_dir, self.config.plugin_root, self.ctx.settings.github_url
        )

    def local_plugin_dir(self, plugin_name: str) -> Path:
        """Directory of a plugin stored inside this marketplace.

        Raises:
            RemoteSourceError: If the plugin lives in another repository
        """
        location = self.locate(plugin_name)
        if not isinstance(location, LocalPluginDir):
            raise RemoteSourceError(
                f'Plugin "{plugin_name}" is hosted at "{location.url}" and cannot be '
                "resolved from this marketplace clone"
            )
        return location.path


@contextmanager
def checkout_marketplace(
    ctx: ProjectContext, url: str, ref: Optional[str], purpose: str = "clone"
) -> Iterator[MarketplaceCheckout]:
    """Clone a marketplace into a scratch directory removed on exit."""
    with temp_clone(
        ctx.git, url, ref, prefix=f"local-skills-{purpose}-", temp_root=ctx.temp_root
    ) as clone_dir:
        sha = ctx.git.head_sha(clone_dir)
        logger.debug("Marketplace %s is at %s", url, sha)
        yield MarketplaceCheckout(ctx, clone_dir, sha)


@contextmanager
def checkout_plugin(checkout: MarketplaceCheckout, plugin_name: str) -> Iterator[Path]:
    """Yield a local directory holding the plugin's files.

    Plugins hosted in their own repository are cloned (default branch) into a
    second scratch directory, removed on exit.
    """
    location = checkout.locate(plugin_name)

    if isinstance(location, LocalPluginDir):
        yield location.path
        return

    logger.debug("Plugin %s is remote, cloning %s", plugin_name, location.url)
    ctx = checkout.ctx
    with temp_clone(
        ctx.git, location.url, None, prefix="local-skills-plugin-", temp_root=ctx.temp_root
    ) as plugin_dir:
        yield plugin_dir
