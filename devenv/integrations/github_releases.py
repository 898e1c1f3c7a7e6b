"""
GitHub release lookup used for binary fallbacks.
"""

import json
import logging
import os
import urllib.request
import urllib.error
from typing import Optional


class GitHubReleasesClient:
    """Fetches the latest release of a repository and picks download assets."""

    def __init__(self, github_token: Optional[str] = None, timeout_seconds: float = 10.0):
        self.logger = logging.getLogger(__name__)
        self.github_token = github_token or os.environ.get('GITHUB_TOKEN')
        self.timeout_seconds = timeout_seconds

    def latest_release(self, owner: str, repo: str) -> dict:
        """Fetch the latest release from GitHub API."""
        url = f"https://api.github.com/repos/{owner}/{repo}/releases/latest"

        request = urllib.request.Request(url)
        if self.github_token:
            request.add_header("Authorization", f"token {self.github_token}")
        request.add_header("Accept", "application/vnd.github.v3+json")

        try:
            with urllib.request.urlopen(request, timeout=self.timeout_seconds) as response:
                release = json.loads(response.read().decode())
                return release if isinstance(release, dict) else {}
        except urllib.error.HTTPError as e:
            if e.code == 403:
                self.logger.warning("GitHub API rate limit exceeded. Set GITHUB_TOKEN to increase limit.")
            else:
                self.logger.warning(f"GitHub API error for {owner}/{repo}: {e.code}")
            return {}
        except urllib.error.URLError as e:
            self.logger.warning(f"Failed to fetch latest release of {owner}/{repo}: {e.reason}")
            return {}

    def find_asset_url(self, owner: str, repo: str, pattern: str) -> Optional[str]:
        """
        Return the first asset download URL of the latest release containing pattern.

        Args:
            owner: Repository owner
            repo: Repository name
            pattern: Substring the download URL must contain (e.g. "amd64.deb")

        Returns:
            Download URL, or None if the release has no matching asset
        """
        release = self.latest_release(owner, repo)
        for asset in release.get("assets", []) or []:
            url = asset.get("browser_download_url") or ""
            if pattern in url:
                self.logger.info(f"Found {owner}/{repo} asset: {url}")
                return url
        return None
