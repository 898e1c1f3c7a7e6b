"""
Integration modules for remote downloads.
"""

from .github_releases import GitHubReleasesClient
from .remote import RemoteFetcher

__all__ = ["GitHubReleasesClient", "RemoteFetcher"]
