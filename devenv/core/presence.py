"""
Presence checks deciding whether a dependency is already satisfied.
"""

import logging
import os
import re
from pathlib import Path
from typing import Awaitable, Callable, Dict

from ..models.platform import PlatformProfile
from .command_runner import CommandRunner


PresenceCheck = Callable[[], Awaitable[bool]]

FIRA_CODE_PATTERN = re.compile(r"Fira.*Code", re.IGNORECASE)


class PresenceChecker:
    """Checks dependencies by name; a few have bespoke checks, the rest use the package manager."""

    def __init__(self, profile: PlatformProfile, runner: CommandRunner, home: Path):
        self.logger = logging.getLogger(__name__)
        self.profile = profile
        self.runner = runner
        self.home = Path(home)
        self._checks: Dict[str, PresenceCheck] = {
            "kitty": self._check_kitty,
            "nvm": self._check_nvm,
            "ohmyzsh": self._check_ohmyzsh,
            "fzf": self._check_fzf,
            "fira_code": self._check_fira_code,
        }

    async def is_installed(self, name: str) -> bool:
        check = self._checks.get(name)
        if check:
            return await check()
        return await self._check_generic(name)

    def _on_path(self, name: str) -> bool:
        return self.runner.which(name) is not None

    async def _check_kitty(self) -> bool:
        candidates = [
            Path("/Applications/kitty.app/Contents/MacOS/kitty"),
            self.home / ".local/kitty.app/bin/kitty",
            self.home / ".local/bin/kitty",
        ]
        return self._on_path("kitty") or any(
            p.is_file() and os.access(p, os.X_OK) for p in candidates
        )

    async def _check_nvm(self) -> bool:
        # nvm is a shell function, so the script on disk is the real marker
        nvm_sh = self.home / ".nvm/nvm.sh"
        return self._on_path("nvm") or (nvm_sh.is_file() and nvm_sh.stat().st_size > 0)

    async def _check_ohmyzsh(self) -> bool:
        return (self.home / ".oh-my-zsh").is_dir()

    async def _check_fzf(self) -> bool:
        return self._on_path("fzf") or (self.home / ".fzf").is_dir()

    async def _check_fira_code(self) -> bool:
        result = await self.runner.query(["fc-list"])
        return result.ok and bool(FIRA_CODE_PATTERN.search(result.stdout))

    async def _check_generic(self, name: str) -> bool:
        if self.profile.is_macos:
            if name == "brew" and self._on_path("brew"):
                return True
            for kind in ("--formula", "--cask"):
                result = await self.runner.query(["brew", "list", kind])
                if result.ok and name in result.stdout.splitlines():
                    return True
            return self._on_path(name)

        result = await self.runner.query([*self.profile.query_command, name])
        return result.ok or self._on_path(name)
