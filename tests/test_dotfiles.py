import tempfile
import unittest
from pathlib import Path

from config.settings import Settings
from devenv.core.dotfiles import DotfilesSync, RepoSync
from tests.helpers import FakeRunner

REPO = "https://example.com/dotfiles.git"


class RepoSyncTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.home = Path(self._tmp.name)
        self.target = self.home / ".dotfiles"

    def tearDown(self):
        self._tmp.cleanup()


class TestCloneOrUpdate(RepoSyncTestCase):
    async def test_missing_directory_is_cloned(self):
        runner = FakeRunner()
        action = await RepoSync(runner).clone_or_update(REPO, self.target)

        self.assertEqual(action, "cloned")
        self.assertEqual(runner.commands, [["git", "clone", "--depth=1", REPO, str(self.target)]])

    async def test_directory_without_git_is_replaced(self):
        self.target.mkdir()
        (self.target / "stale").write_text("x")
        runner = FakeRunner()

        action = await RepoSync(runner).clone_or_update(REPO, self.target)

        self.assertEqual(action, "cloned")
        self.assertFalse(self.target.exists())
        self.assertEqual(runner.commands[0][:2], ["git", "clone"])

    async def test_existing_clone_is_hard_reset_not_merged(self):
        (self.target / ".git").mkdir(parents=True)
        runner = FakeRunner()

        action = await RepoSync(runner).clone_or_update(REPO, self.target)

        self.assertEqual(action, "updated")
        self.assertEqual(runner.commands, [
            ["git", "-C", str(self.target), "fetch", "--all"],
            ["git", "-C", str(self.target), "reset", "--hard", "origin/main"],
        ])
        self.assertFalse(any("merge" in c or "pull" in c for c in runner.commands))

    async def test_reset_follows_configured_branch(self):
        (self.target / ".git").mkdir(parents=True)
        runner = FakeRunner()
        await RepoSync(runner, branch="trunk").clone_or_update(REPO, self.target)
        self.assertEqual(runner.commands[-1][-1], "origin/trunk")

    async def test_dry_run_leaves_directory_alone(self):
        self.target.mkdir()
        runner = FakeRunner(dry_run=True)

        await RepoSync(runner).clone_or_update(REPO, self.target)

        self.assertTrue(self.target.exists())

    async def test_checkout_into_home(self):
        runner = FakeRunner()
        await RepoSync(runner).checkout_into_home(self.target, self.home)

        git_dir = f"--git-dir={self.target / '.git'}"
        work_tree = f"--work-tree={self.home}"
        self.assertEqual(runner.commands, [
            ["git", git_dir, work_tree, "checkout", "-f"],
            ["git", git_dir, work_tree, "config", "status.showUntrackedFiles", "no"],
        ])


class TestDotfilesSync(RepoSyncTestCase):
    async def test_sync_order(self):
        settings = Settings(home=self.home)
        runner = FakeRunner()

        message = await DotfilesSync(RepoSync(runner), settings).sync()

        commands = runner.commands
        self.assertEqual(commands[0], ["git", "clone", "--depth=1", settings.repos.dotfiles_url,
                                       str(self.home / ".dotfiles")])
        self.assertEqual(commands[1][-2:], ["checkout", "-f"])
        self.assertEqual(commands[3], ["git", "clone", "--depth=1", settings.repos.nvim_url,
                                       str(self.home / ".config" / "nvim")])
        self.assertEqual(message, "dotfiles cloned, nvim config cloned")


if __name__ == "__main__":
    unittest.main()
