"""
Dev Environment Installer - workstation bootstrap.
"""

__version__ = "1.0.0"
