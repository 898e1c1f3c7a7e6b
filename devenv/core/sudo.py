"""
Keeps a sudo session alive while long privileged installs run.
"""

import asyncio
import logging
from typing import Optional

from .command_runner import CommandRunner
from ..errors import CommandError, SudoUnavailableError


class SudoKeepAlive:
    """
    Validates sudo credentials once, then refreshes the timestamp in the background.

    Use as an async context manager; the refresher is cancelled on exit.
    """

    def __init__(self, runner: CommandRunner, interval_seconds: float = 60.0):
        self.logger = logging.getLogger(__name__)
        self.runner = runner
        self.interval_seconds = interval_seconds
        self._task: Optional[asyncio.Task] = None

    async def __aenter__(self) -> "SudoKeepAlive":
        await self.validate()
        self._task = asyncio.create_task(self._refresh_loop())
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def validate(self) -> None:
        try:
            # Interactive so the password prompt reaches the terminal
            await self.runner.run(["sudo", "-v"], interactive=True)
        except CommandError as e:
            raise SudoUnavailableError(
                "Sudo privileges are required for installing packages. "
                "Please run this installer in a terminal where you can enter your password."
            ) from e

    async def _refresh_loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            result = await self.runner.query(["sudo", "-n", "true"])
            if not result.ok:
                self.logger.debug(f"sudo refresh failed ({result.returncode})")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
