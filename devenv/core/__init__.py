"""
Core modules for the Dev Environment Installer.
"""

from .orchestrator import DevEnvOrchestrator
from .command_runner import CommandRunner
from .resolver import DependencyResolver
from .installers import InstallerRegistry
from .presence import PresenceChecker

__all__ = [
    "DevEnvOrchestrator",
    "CommandRunner",
    "DependencyResolver",
    "InstallerRegistry",
    "PresenceChecker"
]
