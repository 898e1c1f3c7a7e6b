"""
Data models for the Dev Environment Installer.
"""

from .platform import Platform, PlatformProfile
from .dependency import Dependency, DependencyStatus, InstallMethod, ResolutionSummary
from .run import RunSummary, StepResult, StepStatus

__all__ = [
    "Platform",
    "PlatformProfile",
    "Dependency",
    "DependencyStatus",
    "InstallMethod",
    "ResolutionSummary",
    "RunSummary",
    "StepResult",
    "StepStatus"
]
