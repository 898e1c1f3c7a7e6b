"""
Internet connectivity probe.
"""

import logging
import urllib.request
import urllib.error
from typing import Optional, Sequence

from ..errors import NetworkUnreachableError


class NetworkProbe:
    """Sends HEAD requests to a short list of endpoints until one answers 200."""

    def __init__(self, urls: Sequence[str], timeout_seconds: float = 5.0):
        self.logger = logging.getLogger(__name__)
        self.urls = list(urls)
        self.timeout_seconds = timeout_seconds

    def _probe(self, url: str) -> Optional[int]:
        # urlopen follows redirects, so this is the status of the final hop
        request = urllib.request.Request(url, method="HEAD")
        try:
            with urllib.request.urlopen(request, timeout=self.timeout_seconds) as response:
                return response.status
        except urllib.error.HTTPError as e:
            return e.code
        except (urllib.error.URLError, OSError) as e:
            self.logger.debug(f"Probe of {url} failed: {e}")
            return None

    def check(self) -> str:
        """
        Return the first endpoint that answered 200.

        Raises:
            NetworkUnreachableError: if none did
        """
        self.logger.info("Checking internet connectivity...")
        for url in self.urls:
            if self._probe(url) == 200:
                self.logger.info(f"Network check passed via {url}")
                return url
        raise NetworkUnreachableError("Internet connectivity test failed. Cannot proceed with install.")
