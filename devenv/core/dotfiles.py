"""
Dotfiles and Neovim configuration sync.
"""

import logging
import shutil
from pathlib import Path

from config.settings import Settings
from .command_runner import CommandRunner


class RepoSync:
    """Clone-or-update of a git repository, always forced to match the remote."""

    def __init__(self, runner: CommandRunner, branch: str = "main"):
        self.logger = logging.getLogger(__name__)
        self.runner = runner
        self.branch = branch

    @staticmethod
    def is_clone(target_dir: Path) -> bool:
        return target_dir.is_dir() and (target_dir / ".git").is_dir()

    async def clone_or_update(self, repo_url: str, target_dir: Path) -> str:
        """
        Clone repo_url into target_dir, or hard-reset an existing clone to the remote branch.

        Local divergence in an existing clone is discarded, never merged.

        Returns:
            "cloned" or "updated"
        """
        target_dir = Path(target_dir)
        if not self.is_clone(target_dir):
            self.logger.info(f"Cloning {repo_url} into {target_dir}...")
            if target_dir.exists() or target_dir.is_symlink():
                if self.runner.dry_run:
                    self.logger.info(f"[Dry Run] Would remove {target_dir}")
                elif target_dir.is_dir() and not target_dir.is_symlink():
                    shutil.rmtree(target_dir)
                else:
                    target_dir.unlink()
            if not self.runner.dry_run:
                target_dir.parent.mkdir(parents=True, exist_ok=True)
            await self.runner.run(["git", "clone", "--depth=1", repo_url, str(target_dir)])
            return "cloned"

        self.logger.info(f"{target_dir} exists. Pulling latest changes...")
        await self.runner.run(["git", "-C", str(target_dir), "fetch", "--all"])
        await self.runner.run(["git", "-C", str(target_dir), "reset", "--hard", f"origin/{self.branch}"])
        return "updated"

    async def checkout_into_home(self, repo_dir: Path, home: Path) -> None:
        """Force-checkout repo_dir's tracked files into home, overwriting conflicts."""
        git_dir = f"--git-dir={Path(repo_dir) / '.git'}"
        work_tree = f"--work-tree={home}"

        self.logger.info("Checking out dotfiles to home directory (overwriting conflicts)...")
        await self.runner.run(["git", git_dir, work_tree, "checkout", "-f"])
        self.logger.info("Dotfiles checked out.")

        self.logger.info("Configuring git to ignore untracked files in dotfiles repo...")
        await self.runner.run(["git", git_dir, work_tree, "config", "status.showUntrackedFiles", "no"])


class DotfilesSync:
    """Brings the dotfiles and Neovim configuration repositories up to date."""

    def __init__(self, repo_sync: RepoSync, settings: Settings):
        self.logger = logging.getLogger(__name__)
        self.repo_sync = repo_sync
        self.settings = settings

    async def sync(self) -> str:
        repos = self.settings.repos
        dotfiles = await self.repo_sync.clone_or_update(repos.dotfiles_url, self.settings.dotfiles_dir)
        await self.repo_sync.checkout_into_home(self.settings.dotfiles_dir, self.settings.home)

        nvim = await self.repo_sync.clone_or_update(repos.nvim_url, self.settings.nvim_config_dir)
        self.logger.info("Neovim config is up to date.")
        return f"dotfiles {dotfiles}, nvim config {nvim}"
