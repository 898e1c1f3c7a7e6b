"""
Test doubles shared by the test modules.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from devenv.core.command_runner import CommandResult
from devenv.errors import CommandError


class FakeRunner:
    """Records commands instead of running them."""

    def __init__(self,
                 dry_run: bool = False,
                 on_path: Iterable[str] = (),
                 failing: Iterable[Tuple[str, ...]] = (),
                 query_results: Optional[Dict[Tuple[str, ...], CommandResult]] = None):
        self.dry_run = dry_run
        self.on_path = set(on_path)
        self.failing = set(failing)
        self.query_results = query_results or {}
        self.calls: List[dict] = []
        self.queries: List[List[str]] = []
        self.extra_path: List[str] = []

    @property
    def commands(self) -> List[List[str]]:
        return [c["argv"] for c in self.calls]

    def which(self, name: str) -> Optional[str]:
        return f"/usr/bin/{name}" if name in self.on_path else None

    def prepend_path(self, *dirs: str) -> None:
        for d in reversed(dirs):
            self.extra_path.insert(0, str(d))

    async def run(self, argv, check=True, cwd=None, env=None, input_text=None, interactive=False):
        argv = [str(a) for a in argv]
        self.calls.append({"argv": argv, "cwd": cwd, "env": env, "input_text": input_text,
                           "interactive": interactive})
        if self.dry_run:
            return CommandResult(argv=argv, returncode=0, executed=False)
        returncode = 1 if tuple(argv) in self.failing else 0
        if check and returncode:
            raise CommandError(argv, returncode, "boom")
        return CommandResult(argv=argv, returncode=returncode)

    async def query(self, argv, cwd=None):
        argv = [str(a) for a in argv]
        self.queries.append(argv)
        return self.query_results.get(tuple(argv), CommandResult(argv=argv, returncode=1))

    async def run_script(self, interpreter, script_text, env=None):
        return await self.run(interpreter, env=env, input_text=script_text)


def ok(argv, stdout: str = "") -> CommandResult:
    return CommandResult(argv=list(argv), returncode=0, stdout=stdout)


class FakeFetcher:
    """Serves canned scripts and writes canned payloads."""

    def __init__(self, payloads: Optional[Dict[str, bytes]] = None):
        self.payloads = payloads or {}
        self.fetched: List[str] = []
        self.downloaded: List[Tuple[str, Path]] = []

    def fetch_text(self, url: str) -> str:
        self.fetched.append(url)
        return f"# script from {url}\n"

    def download(self, url: str, dest: Path) -> Path:
        self.downloaded.append((url, Path(dest)))
        Path(dest).parent.mkdir(parents=True, exist_ok=True)
        Path(dest).write_bytes(self.payloads.get(url, b"payload"))
        return Path(dest)


class FakeReleases:
    def __init__(self, url: Optional[str] = None):
        self.url = url
        self.lookups: List[Tuple[str, str, str]] = []

    def find_asset_url(self, owner: str, repo: str, pattern: str) -> Optional[str]:
        self.lookups.append((owner, repo, pattern))
        return self.url


class StubProbe:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.calls = 0

    def check(self) -> str:
        self.calls += 1
        if self.error:
            raise self.error
        return "https://github.com"
