"""
Orchestrator - sequences the network probe, dependency installer and dotfiles sync.
"""

import asyncio
import time
from typing import Awaitable, Callable, Optional

from config.settings import Settings
from ..integrations.github_releases import GitHubReleasesClient
from ..integrations.remote import RemoteFetcher
from ..models.run import RunSummary, StepResult, StepStatus
from ..utils.logging import setup_logger
from .command_runner import CommandRunner
from .dotfiles import DotfilesSync, RepoSync
from .installers import InstallerRegistry
from .network import NetworkProbe
from .platform import detect_platform, resolve_dependency_list
from .presence import PresenceChecker
from .resolver import DependencyResolver
from .sudo import SudoKeepAlive


DEPENDENCY_STEP = "Dependency Installer"
DOTFILES_STEP = "Dotfiles + Neovim Config Setup"


class DevEnvOrchestrator:
    """Runs every setup step in order; the first failure aborts the run."""

    def __init__(self,
                 settings: Settings,
                 dry_run: Optional[bool] = None,
                 runner: Optional[CommandRunner] = None,
                 probe: Optional[NetworkProbe] = None,
                 fetcher: Optional[RemoteFetcher] = None,
                 releases: Optional[GitHubReleasesClient] = None):
        """
        Initialize the orchestrator.

        Args:
            settings: Application settings
            dry_run: Overrides settings.dry_run when given
            runner: Command runner (built from dry_run when omitted)
            probe: Network probe (built from settings.network when omitted)
            fetcher: Remote script fetcher for install routines
            releases: GitHub release client for binary fallbacks
        """
        self.logger = setup_logger(__name__)
        self.settings = settings
        self.dry_run = settings.dry_run if dry_run is None else dry_run
        self.runner = runner or CommandRunner(dry_run=self.dry_run)
        self.probe = probe or NetworkProbe(
            settings.network.probe_urls,
            timeout_seconds=settings.network.timeout_seconds
        )
        self.fetcher = fetcher
        self.releases = releases

    async def run(self) -> RunSummary:
        """
        Run the whole setup.

        Returns:
            Run summary; step names are the same with and without dry run
        """
        self.logger.info("Starting Dev Env Installer")
        self.logger.info(f"Logging to: {self.settings.log_path}")
        summary = RunSummary(dry_run=self.dry_run, log_path=str(self.settings.log_path))

        try:
            summary.network_url = await asyncio.to_thread(self.probe.check)
            await self._run_step(summary, DEPENDENCY_STEP, self._install_dependencies)
            await self._run_step(summary, DOTFILES_STEP, self._sync_dotfiles)
        except Exception:
            summary.complete(False)
            raise

        summary.complete(True)
        self.logger.info("All done! Your environment is ready.")
        if self.dry_run:
            self.logger.info("Dry run completed, no changes were made.")
        return summary

    async def _run_step(self,
                        summary: RunSummary,
                        name: str,
                        step: Callable[[], Awaitable[str]]) -> StepResult:
        self.logger.info(f"Running: {name}")
        start = time.monotonic()
        try:
            message = await step()
        except Exception as e:
            summary.steps.append(StepResult(
                name=name,
                status=StepStatus.FAILED,
                message=str(e),
                duration_seconds=time.monotonic() - start
            ))
            self.logger.error(f"{name} failed. Check log at {self.settings.log_path}")
            raise

        result = StepResult(
            name=name,
            status=StepStatus.SKIPPED if self.dry_run else StepStatus.COMPLETED,
            message=message,
            duration_seconds=time.monotonic() - start
        )
        summary.steps.append(result)
        if self.dry_run:
            self.logger.info(f"[Dry Run] {name}: {message}")
        else:
            self.logger.info(f"{name} completed successfully.")
        return result

    async def _install_dependencies(self) -> str:
        profile = detect_platform(self.settings.platform_override)
        names = resolve_dependency_list(profile, self.settings.dependencies)

        checker = PresenceChecker(profile, self.runner, self.settings.home)
        registry = InstallerRegistry(
            profile,
            self.runner,
            self.settings.home,
            downloads=self.settings.downloads,
            fetcher=self.fetcher,
            releases=self.releases
        )
        resolver = DependencyResolver(checker, registry, dry_run=self.dry_run)

        if self.dry_run:
            resolution = await resolver.process(names)
        else:
            async with SudoKeepAlive(self.runner, self.settings.sudo.refresh_interval_seconds):
                resolution = await resolver.process(names)
        return resolution.message

    async def _sync_dotfiles(self) -> str:
        repo_sync = RepoSync(self.runner, branch=self.settings.repos.branch)
        return await DotfilesSync(repo_sync, self.settings).sync()
