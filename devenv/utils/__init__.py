"""
Utility modules for the Dev Environment Installer.
"""

from .logging import setup_logger, setup_root_logger

__all__ = ["setup_logger", "setup_root_logger"]
