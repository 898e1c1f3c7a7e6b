"""
Error types raised by the installer. Every one of them is fatal to a run.
"""

from typing import List, Optional


class DevEnvError(RuntimeError):
    """Base class for installer failures."""


class UnsupportedPlatformError(DevEnvError):
    """Raised when the host platform is neither Linux nor macOS."""

    def __init__(self, identifier: str):
        super().__init__(f"Unsupported OS: {identifier}")
        self.identifier = identifier


class NetworkUnreachableError(DevEnvError):
    """Raised when none of the probe endpoints answered."""


class SudoUnavailableError(DevEnvError):
    """Raised when sudo credentials could not be validated."""


class CommandError(DevEnvError):
    """Raised when a checked command exits non-zero."""

    def __init__(self, argv: List[str], returncode: int, stderr: str = ""):
        self.argv = argv
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command failed ({returncode}): {' '.join(argv)}"
        if stderr:
            message += f"\n{stderr.strip()}"
        super().__init__(message)


class InstallError(DevEnvError):
    """Raised when an install routine fails."""

    def __init__(self, dependency: str, reason: str):
        super().__init__(f"Failed to install {dependency}: {reason}")
        self.dependency = dependency
        self.reason = reason


class ReleaseAssetNotFoundError(InstallError):
    """Raised when a release has no asset matching the wanted pattern."""


class DownloadError(DevEnvError):
    """Raised when a remote payload could not be fetched."""

    def __init__(self, url: str, reason: Optional[str] = None):
        super().__init__(f"Failed to download {url}" + (f": {reason}" if reason else ""))
        self.url = url
