"""
Install routines, dispatched by dependency name.
"""

import asyncio
import logging
import tempfile
import zipfile
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Optional

from config.settings import DownloadsConfig
from ..integrations.github_releases import GitHubReleasesClient
from ..integrations.remote import RemoteFetcher
from ..models.dependency import InstallMethod
from ..models.platform import PlatformProfile
from .command_runner import CommandRunner
from ..errors import CommandError, DownloadError, InstallError, ReleaseAssetNotFoundError


InstallRoutine = Callable[[], Awaitable[None]]

NEOVIM_BUILD_DEPS_MACOS = ["ninja", "libtool", "automake", "cmake", "pkg-config", "gettext", "curl"]
NEOVIM_BUILD_DEPS_LINUX = ["ninja-build", "gettext", "cmake", "unzip", "curl", "build-essential"]


class InstallerRegistry:
    """
    Maps dependency names to install routines.

    Names without a custom routine are installed with the platform package
    manager, using the dependency name as the package name.
    """

    def __init__(self,
                 profile: PlatformProfile,
                 runner: CommandRunner,
                 home: Path,
                 downloads: Optional[DownloadsConfig] = None,
                 fetcher: Optional[RemoteFetcher] = None,
                 releases: Optional[GitHubReleasesClient] = None):
        self.logger = logging.getLogger(__name__)
        self.profile = profile
        self.runner = runner
        self.home = Path(home)
        self.downloads = downloads or DownloadsConfig()
        self.fetcher = fetcher or RemoteFetcher(timeout_seconds=self.downloads.timeout_seconds)
        self.releases = releases or GitHubReleasesClient()

        self._routines: Dict[str, InstallRoutine] = {
            "brew": self.install_brew,
            "fzf": self.install_fzf,
            "rg": self.install_rg,
            "nvm": self.install_nvm,
            "node": self.install_node,
            "kitty": self.install_kitty,
            "nvim": self.install_nvim,
            "ohmyzsh": self.install_ohmyzsh,
            "fira_code": self.install_fira_code,
        }

    def method_for(self, name: str) -> InstallMethod:
        return InstallMethod.CUSTOM if name in self._routines else InstallMethod.PACKAGE_MANAGER

    async def install(self, name: str) -> InstallMethod:
        """
        Install a dependency with its custom routine or the package manager.

        Raises:
            InstallError: on the first failing command or download
        """
        method = self.method_for(name)
        try:
            if method == InstallMethod.CUSTOM:
                await self._routines[name]()
            else:
                await self.install_with_package_manager(name)
        except InstallError:
            raise
        except (CommandError, DownloadError, zipfile.BadZipFile) as e:
            raise InstallError(name, str(e)) from e
        return method

    async def _pkg_install(self, *packages: str, check: bool = True):
        return await self.runner.run([*self.profile.install_command, *packages], check=check)

    async def _fetch_script(self, url: str) -> str:
        return await asyncio.to_thread(self.fetcher.fetch_text, url)

    async def install_with_package_manager(self, name: str) -> None:
        self.logger.info(f"Installing {name} via package manager...")
        await self._pkg_install(name)
        self.logger.info(f"{name} installed.")

    async def install_brew(self) -> None:
        self.logger.info("Installing Homebrew...")
        script = await self._fetch_script(self.downloads.homebrew_script_url)
        # The Homebrew installer asks for confirmation on the terminal
        await self.runner.run(["/bin/bash", "-c", script], interactive=True)
        if Path("/opt/homebrew/bin/brew").exists():
            self.runner.prepend_path("/opt/homebrew/bin", "/opt/homebrew/sbin")
        self.logger.info("Homebrew installed.")

    async def install_fzf(self) -> None:
        self.logger.info("Installing fzf...")
        if self.profile.is_macos:
            await self.runner.run(["brew", "install", "fzf"])
        else:
            fzf_dir = self.home / ".fzf"
            await self.runner.run(["git", "clone", "--depth", "1", self.downloads.fzf_repo_url, str(fzf_dir)])
            await self.runner.run([str(fzf_dir / "install"), "--all"])
        self.logger.info("fzf installed.")

    async def install_rg(self) -> None:
        self.logger.info("Installing ripgrep...")
        result = await self._pkg_install("ripgrep", check=False)
        if not result.ok:
            self.logger.info("ripgrep not found in package manager. Falling back to GitHub release...")
            url = await asyncio.to_thread(
                self.releases.find_asset_url,
                self.downloads.ripgrep_owner,
                self.downloads.ripgrep_repo,
                self.downloads.ripgrep_asset_pattern,
            )
            if not url:
                raise ReleaseAssetNotFoundError("rg", "Could not find ripgrep binary URL")

            with tempfile.NamedTemporaryFile(suffix=".deb", delete=False) as tmp:
                package_path = Path(tmp.name)
            try:
                await asyncio.to_thread(self.fetcher.download, url, package_path)
                await self.runner.run(["sudo", "dpkg", "-i", str(package_path)])
            finally:
                package_path.unlink(missing_ok=True)
        self.logger.info("ripgrep installed.")

    async def install_nvm(self) -> None:
        self.logger.info("Installing nvm...")
        script = await self._fetch_script(self.downloads.nvm_script_url)
        # install.sh only creates NVM_DIR when it matches its own default
        nvm_dir = self.home / ".nvm"
        nvm_dir.mkdir(parents=True, exist_ok=True)
        await self.runner.run_script(["bash"], script, env={"NVM_DIR": str(nvm_dir)})
        self.logger.info("nvm installed.")

    async def install_node(self) -> None:
        self.logger.info("Installing Node.js...")
        # nvm is a shell function and only exists inside a shell that sourced it
        await self.runner.run(
            ["bash", "-c", '[ -s "$NVM_DIR/nvm.sh" ] && . "$NVM_DIR/nvm.sh"; nvm install --lts'],
            env={"NVM_DIR": str(self.home / ".nvm")}
        )
        self.logger.info("Node.js installed.")

    async def install_kitty(self) -> None:
        self.logger.info("Installing kitty...")
        script = await self._fetch_script(self.downloads.kitty_script_url)
        await self.runner.run_script(["sh", "/dev/stdin", "launch=n"], script)
        self.runner.prepend_path(str(self.home / ".local/kitty.app/bin"), str(self.home / ".local/bin"))
        self.logger.info("kitty installed.")

    async def install_nvim(self) -> None:
        self.logger.info("Building and installing Neovim from source...")
        if self.profile.is_macos:
            await self.runner.run(["brew", "install", *NEOVIM_BUILD_DEPS_MACOS])
        else:
            await self._pkg_install(*NEOVIM_BUILD_DEPS_LINUX)

        with tempfile.TemporaryDirectory(prefix="neovim-") as temp_dir:
            src = Path(temp_dir) / "neovim-src"
            await self.runner.run(["git", "clone", self.downloads.neovim_repo_url, str(src)])
            await self.runner.run(["git", "-C", str(src), "checkout", self.downloads.neovim_ref])
            await self.runner.run(["make", "CMAKE_BUILD_TYPE=RelWithDebInfo"], cwd=str(src))
            await self.runner.run(["sudo", "make", "install"], cwd=str(src))
        self.logger.info("Neovim installed.")

    async def install_ohmyzsh(self) -> None:
        self.logger.info("Installing oh-my-zsh...")
        script = await self._fetch_script(self.downloads.ohmyzsh_script_url)
        await self.runner.run(["sh", "-c", script], env={"RUNZSH": "no", "KEEP_ZSHRC": "yes", "CHSH": "no"})
        self.logger.info("oh-my-zsh installed.")

    async def install_fira_code(self) -> None:
        self.logger.info("Installing Fira Code font...")
        if not self.profile.is_macos:
            await self._pkg_install("fonts-firacode")
            self.logger.info("Fira Code font installed on Linux.")
            return

        await self.runner.run(["brew", "tap", "homebrew/cask-fonts"])
        await self._pkg_install("--cask", "font-fira-code")
        self.logger.info("Fira Code font installed on macOS via Homebrew.")

        # Symbols-only Nerd Font provides the icon glyphs
        fonts_dir = self.home / "Library/Fonts"
        archive = self.home / "Downloads/NerdFontsSymbolsOnly.zip"
        fonts_dir.mkdir(parents=True, exist_ok=True)
        await asyncio.to_thread(self.fetcher.download, self.downloads.nerd_fonts_url, archive)
        try:
            extracted = await asyncio.to_thread(_extract_zip, archive, fonts_dir)
        finally:
            archive.unlink(missing_ok=True)
        self.logger.info(f"Nerd Fonts Symbols Only installed ({len(extracted)} files) for icon support on macOS.")


def _extract_zip(archive: Path, dest: Path) -> List[str]:
    with zipfile.ZipFile(archive) as zf:
        zf.extractall(dest)
        return zf.namelist()
