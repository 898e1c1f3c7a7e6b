"""
Configuration settings for the Dev Environment Installer.
"""

from typing import Optional, List
from pathlib import Path
from pydantic import BaseModel, Field, validator
from pydantic_settings import BaseSettings


DEFAULT_DEPENDENCIES = [
    "git",
    "nvm",
    "node",
    "kitty",
    "nvim",
    "grep",
    "rg",
    "zsh",
    "tmux",
    "fzf",
    "ohmyzsh",
    "fira_code",
]


class NetworkConfig(BaseModel):
    """Connectivity probe configuration."""
    probe_urls: List[str] = Field(
        default=[
            "https://www.google.com",
            "https://github.com",
            "https://raw.githubusercontent.com",
        ],
        description="Endpoints probed in order; the first 200 wins"
    )
    timeout_seconds: float = Field(default=5.0, description="Connect timeout per probe")

    @validator('probe_urls')
    def validate_probe_urls(cls, v):
        if not v:
            raise ValueError("At least one probe URL is required")
        return v


class SudoConfig(BaseModel):
    """Privileged session keep-alive configuration."""
    refresh_interval_seconds: float = Field(default=60.0, description="Seconds between sudo refreshes")


class ReposConfig(BaseModel):
    """Dotfiles and editor configuration repositories."""
    dotfiles_url: str = Field(
        default="https://github.com/superbrobenji/dotfiles.git",
        description="Dotfiles repository"
    )
    dotfiles_dir: Path = Field(default=Path(".dotfiles"), description="Clone target, relative to home")
    nvim_url: str = Field(
        default="https://github.com/superbrobenji/nvim.git",
        description="Neovim configuration repository"
    )
    nvim_dir: Path = Field(default=Path(".config/nvim"), description="Clone target, relative to home")
    branch: str = Field(default="main", description="Remote branch local clones are reset to")


class DownloadsConfig(BaseModel):
    """Remote installer payloads."""
    homebrew_script_url: str = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
    nvm_script_url: str = "https://raw.githubusercontent.com/nvm-sh/nvm/master/install.sh"
    kitty_script_url: str = "https://sw.kovidgoyal.net/kitty/installer.sh"
    ohmyzsh_script_url: str = "https://raw.githubusercontent.com/ohmyzsh/ohmyzsh/master/tools/install.sh"
    fzf_repo_url: str = "https://github.com/junegunn/fzf.git"
    neovim_repo_url: str = "https://github.com/neovim/neovim.git"
    neovim_ref: str = Field(default="stable", description="Neovim ref checked out before building")
    ripgrep_owner: str = "BurntSushi"
    ripgrep_repo: str = "ripgrep"
    ripgrep_asset_pattern: str = Field(default="amd64.deb", description="Substring the fallback asset URL must contain")
    nerd_fonts_url: str = "https://github.com/ryanoasis/nerd-fonts/releases/download/v3.2.1/NerdFontsSymbolsOnly.zip"
    timeout_seconds: float = Field(default=60.0, description="HTTP timeout for downloads")


class LoggingConfig(BaseModel):
    """Logging configuration."""
    level: str = Field(default="INFO", description="Logging level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format"
    )
    file_path: Path = Field(default=Path(".dev-env-installer.log"), description="Log file, relative to home")
    max_file_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(default=5, description="Number of log backups to keep")

    @validator('level')
    def validate_level(cls, v):
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown logging level: {v}")
        return level


class Settings(BaseSettings):
    """Main application settings."""
    home: Path = Field(default_factory=Path.home, description="Home directory that receives dotfiles")
    dependencies: List[str] = Field(
        default_factory=lambda: list(DEFAULT_DEPENDENCIES),
        description="Dependencies resolved in order"
    )
    platform_override: Optional[str] = Field(
        None,
        description="Platform identifier used instead of sys.platform"
    )

    # Component configs
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    sudo: SudoConfig = Field(default_factory=SudoConfig)
    repos: ReposConfig = Field(default_factory=ReposConfig)
    downloads: DownloadsConfig = Field(default_factory=DownloadsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Operational settings
    dry_run: bool = Field(default=False, description="Report actions without performing them")

    class Config:
        env_prefix = "DEVENV_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_nested_delimiter = "__"
        extra = "ignore"  # Ignore extra fields from environment

    @validator('home')
    def validate_home(cls, v):
        return Path(v).expanduser()

    def resolve_path(self, path: Path) -> Path:
        """Resolve a configured path against the home directory."""
        path = Path(path).expanduser()
        return path if path.is_absolute() else self.home / path

    @property
    def dotfiles_dir(self) -> Path:
        return self.resolve_path(self.repos.dotfiles_dir)

    @property
    def nvim_config_dir(self) -> Path:
        return self.resolve_path(self.repos.nvim_dir)

    @property
    def log_path(self) -> Path:
        return self.resolve_path(self.logging.file_path)
