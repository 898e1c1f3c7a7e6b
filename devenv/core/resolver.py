"""
Dependency resolution: check every dependency, then install the missing ones.
"""

import logging
from typing import Sequence

from ..models.dependency import (
    ALL_INSTALLED_MESSAGE,
    MISSING_INSTALLED_MESSAGE,
    Dependency,
    DependencyStatus,
    ResolutionSummary,
)
from ..errors import InstallError
from .installers import InstallerRegistry
from .presence import PresenceChecker


class DependencyResolver:
    """Runs the presence-check-then-install pass over an ordered dependency list."""

    def __init__(self, checker: PresenceChecker, registry: InstallerRegistry, dry_run: bool = False):
        self.logger = logging.getLogger(__name__)
        self.checker = checker
        self.registry = registry
        self.dry_run = dry_run

    async def process(self, names: Sequence[str]) -> ResolutionSummary:
        """
        Check each dependency in order and install those that are missing.

        Installation stops at the first failure, which propagates to the
        caller. Already-present dependencies never reach the installer.

        Args:
            names: Dependency names in processing order

        Returns:
            Resolution summary
        """
        summary = ResolutionSummary(platform=self.checker.profile.platform, dry_run=self.dry_run)
        missing = []

        for name in names:
            dep = Dependency(name=name)
            summary.dependencies.append(dep)
            if await self.checker.is_installed(name):
                dep.update_status(DependencyStatus.INSTALLED)
                self.logger.info(f"{name} is already installed.")
            else:
                dep.update_status(DependencyStatus.MISSING)
                dep.method = self.registry.method_for(name)
                self.logger.warning(f"{name} is missing.")
                missing.append(dep)

        if not missing:
            summary.message = ALL_INSTALLED_MESSAGE
            self.logger.info(summary.message)
            return summary

        if self.dry_run:
            for dep in missing:
                dep.update_status(DependencyStatus.PLANNED)
                self.logger.info(f"[Dry Run] Would install {dep.name} ({dep.method.value})")
            summary.message = f"Dry run: {len(missing)} dependencies would be installed."
            self.logger.info(summary.message)
            return summary

        self.logger.info("Installing missing dependencies...")
        for dep in missing:
            dep.update_status(DependencyStatus.INSTALLING)
            try:
                await self.registry.install(dep.name)
            except InstallError as e:
                dep.update_status(DependencyStatus.FAILED, str(e))
                self.logger.error(str(e))
                raise
            dep.update_status(DependencyStatus.COMPLETED)

        summary.message = MISSING_INSTALLED_MESSAGE
        self.logger.info(summary.message)
        return summary
