"""
Operating system detection.
"""

import logging
import sys
from typing import List, Optional, Sequence

from ..models.platform import Platform, PlatformProfile
from ..errors import UnsupportedPlatformError

logger = logging.getLogger(__name__)


LINUX_PROFILE = PlatformProfile(
    platform=Platform.LINUX,
    install_command=["sudo", "apt-get", "install", "-y"],
    query_command=["dpkg", "-s"],
)

MACOS_PROFILE = PlatformProfile(
    platform=Platform.MACOS,
    install_command=["brew", "install"],
    query_command=["brew", "list"],
    extra_dependencies=["brew"],
)


def detect_platform(identifier: Optional[str] = None) -> PlatformProfile:
    """
    Map a platform identifier to its package-manager profile.

    Args:
        identifier: sys.platform style identifier; defaults to the running host

    Returns:
        Profile for Linux or macOS

    Raises:
        UnsupportedPlatformError: for anything else
    """
    identifier = identifier or sys.platform
    logger.info("Detecting operating system...")

    if identifier.startswith("linux"):
        profile = LINUX_PROFILE
    elif identifier.startswith("darwin"):
        profile = MACOS_PROFILE
    else:
        raise UnsupportedPlatformError(identifier)

    logger.info(f"Detected OS: {profile.platform.value}")
    return profile


def resolve_dependency_list(profile: PlatformProfile, names: Sequence[str]) -> List[str]:
    """Prepend platform extras to the configured names, dropping duplicates."""
    resolved: List[str] = []
    for name in [*profile.extra_dependencies, *names]:
        if name not in resolved:
            resolved.append(name)
    return resolved
