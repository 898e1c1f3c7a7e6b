import asyncio
import unittest

from devenv.core.sudo import SudoKeepAlive
from devenv.errors import SudoUnavailableError
from tests.helpers import FakeRunner, ok


class TestSudoKeepAlive(unittest.IsolatedAsyncioTestCase):
    async def test_validates_interactively(self):
        runner = FakeRunner()
        async with SudoKeepAlive(runner, interval_seconds=60):
            pass
        self.assertEqual(runner.commands, [["sudo", "-v"]])
        self.assertTrue(runner.calls[0]["interactive"])

    async def test_refused_credentials(self):
        runner = FakeRunner(failing={("sudo", "-v")})
        with self.assertRaises(SudoUnavailableError):
            async with SudoKeepAlive(runner):
                self.fail("body must not run")

    async def test_refreshes_in_background_until_exit(self):
        runner = FakeRunner(query_results={("sudo", "-n", "true"): ok(["sudo", "-n", "true"])})
        keep_alive = SudoKeepAlive(runner, interval_seconds=0.01)

        async with keep_alive:
            await asyncio.sleep(0.05)

        refreshes = len(runner.queries)
        self.assertGreaterEqual(refreshes, 1)
        self.assertTrue(all(q == ["sudo", "-n", "true"] for q in runner.queries))

        await asyncio.sleep(0.03)
        self.assertEqual(len(runner.queries), refreshes)

    async def test_failed_refresh_keeps_running(self):
        runner = FakeRunner()
        async with SudoKeepAlive(runner, interval_seconds=0.01):
            await asyncio.sleep(0.05)
        self.assertGreaterEqual(len(runner.queries), 2)


if __name__ == "__main__":
    unittest.main()
