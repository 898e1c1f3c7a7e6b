import tempfile
import unittest
from pathlib import Path

from config.settings import Settings
from devenv.core.orchestrator import DEPENDENCY_STEP, DOTFILES_STEP, DevEnvOrchestrator
from devenv.errors import InstallError, NetworkUnreachableError, UnsupportedPlatformError
from devenv.models.run import StepStatus
from tests.helpers import FakeFetcher, FakeReleases, FakeRunner, StubProbe, ok


class OrchestratorTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.home = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def settings(self, **overrides):
        values = {"home": self.home, "dependencies": ["git", "tmux"], "platform_override": "linux"}
        values.update(overrides)
        return Settings(**values)

    def orchestrator(self, settings, runner, probe=None, dry_run=None):
        return DevEnvOrchestrator(
            settings,
            dry_run=dry_run,
            runner=runner,
            probe=probe or StubProbe(),
            fetcher=FakeFetcher(),
            releases=FakeReleases(),
        )

    @staticmethod
    def linux_runner(**kwargs):
        return FakeRunner(query_results={("dpkg", "-s", "git"): ok(["dpkg", "-s", "git"])}, **kwargs)


class TestOrchestrator(OrchestratorTestCase):
    async def test_full_run(self):
        runner = self.linux_runner()
        summary = await self.orchestrator(self.settings(), runner).run()

        self.assertTrue(summary.success)
        self.assertEqual(summary.step_names, [DEPENDENCY_STEP, DOTFILES_STEP])
        self.assertTrue(all(s.status == StepStatus.COMPLETED for s in summary.steps))
        self.assertEqual(runner.commands[0], ["sudo", "-v"])
        self.assertIn(["sudo", "apt-get", "install", "-y", "tmux"], runner.commands)
        self.assertNotIn(["sudo", "apt-get", "install", "-y", "git"], runner.commands)
        self.assertEqual(runner.commands[-1][:3], ["git", "clone", "--depth=1"])

    async def test_dry_run_reports_same_steps_without_side_effects(self):
        normal = await self.orchestrator(self.settings(), self.linux_runner()).run()

        runner = self.linux_runner(dry_run=True)
        dry = await self.orchestrator(self.settings(), runner, dry_run=True).run()

        self.assertEqual(dry.step_names, normal.step_names)
        self.assertTrue(dry.dry_run)
        self.assertTrue(all(s.status == StepStatus.SKIPPED for s in dry.steps))
        self.assertNotIn(["sudo", "-v"], runner.commands)
        self.assertFalse(any(c[:3] == ["sudo", "apt-get", "install"] for c in runner.commands))
        self.assertIn("1", dry.steps[0].message)

    async def test_dry_run_from_settings(self):
        runner = self.linux_runner(dry_run=True)
        orchestrator = DevEnvOrchestrator(self.settings(dry_run=True), runner=runner, probe=StubProbe())
        self.assertTrue(orchestrator.dry_run)

    async def test_unsupported_platform_fails_before_installing(self):
        runner = FakeRunner()
        with self.assertRaises(UnsupportedPlatformError):
            await self.orchestrator(self.settings(platform_override="sunos5"), runner).run()
        self.assertEqual(runner.calls, [])
        self.assertEqual(runner.queries, [])

    async def test_unreachable_network_stops_everything(self):
        runner = FakeRunner()
        probe = StubProbe(NetworkUnreachableError("offline"))
        with self.assertRaises(NetworkUnreachableError):
            await self.orchestrator(self.settings(), runner, probe=probe).run()
        self.assertEqual(runner.calls, [])

    async def test_install_failure_skips_dotfiles(self):
        runner = self.linux_runner(failing={("sudo", "apt-get", "install", "-y", "tmux")})
        with self.assertRaises(InstallError):
            await self.orchestrator(self.settings(), runner).run()
        self.assertFalse(any(c[:2] == ["git", "clone"] for c in runner.commands))

    async def test_all_present_message(self):
        runner = FakeRunner(on_path={"git", "tmux"})
        summary = await self.orchestrator(self.settings(), runner).run()
        self.assertEqual(summary.steps[0].message, "All dependencies are already installed.")


if __name__ == "__main__":
    unittest.main()
