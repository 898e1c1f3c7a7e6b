"""
Fetching remote installer scripts and payloads.
"""

import logging
import shutil
import urllib.request
import urllib.error
from pathlib import Path

from ..errors import DownloadError


USER_AGENT = "dev-env-installer"


class RemoteFetcher:
    """Downloads installer scripts and release payloads over HTTPS."""

    def __init__(self, timeout_seconds: float = 60.0):
        self.logger = logging.getLogger(__name__)
        self.timeout_seconds = timeout_seconds

    def _open(self, url: str):
        request = urllib.request.Request(url)
        request.add_header("User-Agent", USER_AGENT)
        try:
            return urllib.request.urlopen(request, timeout=self.timeout_seconds)
        except urllib.error.HTTPError as e:
            raise DownloadError(url, f"HTTP {e.code}") from e
        except urllib.error.URLError as e:
            raise DownloadError(url, str(e.reason)) from e

    def fetch_text(self, url: str) -> str:
        """Fetch a script body."""
        self.logger.info(f"Fetching {url}")
        with self._open(url) as response:
            return response.read().decode()

    def download(self, url: str, dest: Path) -> Path:
        """Stream a binary payload to dest."""
        self.logger.info(f"Downloading {url} -> {dest}")
        dest = Path(dest)
        dest.parent.mkdir(parents=True, exist_ok=True)
        with self._open(url) as response, open(dest, "wb") as f:
            shutil.copyfileobj(response, f)
        return dest
