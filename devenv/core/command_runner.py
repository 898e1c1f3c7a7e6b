"""
Command runner for executing package managers, installers and git.
"""

import asyncio
import logging
import os
import shlex
import shutil
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from ..errors import CommandError


@dataclass
class CommandResult:
    """Outcome of a single command."""
    argv: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""
    executed: bool = True

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def format_argv(argv: Sequence[str]) -> str:
    return " ".join(shlex.quote(a) for a in argv)


@dataclass
class CommandRunner:
    """
    Runs commands as asyncio subprocesses with consistent logging.

    Mutating commands go through run()/run_script() and are only logged in
    dry-run mode. query() is for read-only probes and always executes.
    """
    dry_run: bool = False
    env: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        self.logger = logging.getLogger(__name__)
        self._extra_path: List[str] = []

    @property
    def path(self) -> str:
        """PATH seen by commands started from this runner."""
        base = self.env.get("PATH", os.environ.get("PATH", ""))
        return os.pathsep.join([*self._extra_path, base]) if self._extra_path else base

    def prepend_path(self, *dirs: str) -> None:
        """Make binaries installed during the run resolvable for later commands."""
        for d in reversed(dirs):
            d = str(d)
            if d not in self._extra_path:
                self._extra_path.insert(0, d)
        self.logger.debug(f"PATH now starts with {self._extra_path}")

    def which(self, name: str) -> Optional[str]:
        return shutil.which(name, path=self.path)

    def _build_env(self, env: Optional[Mapping[str, str]]) -> Dict[str, str]:
        merged = dict(os.environ)
        merged.update(self.env)
        merged.update(env or {})
        merged["PATH"] = self.path
        return merged

    async def run(self,
                  argv: Sequence[str],
                  check: bool = True,
                  cwd: Optional[str] = None,
                  env: Optional[Mapping[str, str]] = None,
                  input_text: Optional[str] = None,
                  interactive: bool = False) -> CommandResult:
        """
        Run a command that may change the host.

        Args:
            argv: Command and arguments
            check: Raise CommandError on non-zero exit
            cwd: Working directory
            env: Extra environment variables
            input_text: Text fed to stdin
            interactive: Leave stdio attached to the terminal

        Returns:
            Command result (a synthetic success in dry-run mode)
        """
        argv_list = [str(a) for a in argv]
        if self.dry_run:
            self.logger.info(f"[Dry Run] Would run: {format_argv(argv_list)}")
            return CommandResult(argv=argv_list, returncode=0, executed=False)

        self.logger.info(f"CMD {format_argv(argv_list)}")
        return await self._execute(argv_list, check, cwd, env, input_text, interactive)

    async def query(self, argv: Sequence[str], cwd: Optional[str] = None) -> CommandResult:
        """Run a read-only probe. Executes in dry-run mode and never raises on exit status."""
        argv_list = [str(a) for a in argv]
        self.logger.debug(f"QUERY {format_argv(argv_list)}")
        if not self.which(argv_list[0]) and not os.path.isabs(argv_list[0]):
            return CommandResult(argv=argv_list, returncode=127, stderr=f"{argv_list[0]}: not found")
        return await self._execute(argv_list, False, cwd, None, None, False)

    async def run_script(self,
                         interpreter: Sequence[str],
                         script_text: str,
                         env: Optional[Mapping[str, str]] = None) -> CommandResult:
        """Feed a fetched installer script to an interpreter on stdin."""
        return await self.run(interpreter, env=env, input_text=script_text)

    async def _execute(self,
                       argv: List[str],
                       check: bool,
                       cwd: Optional[str],
                       env: Optional[Mapping[str, str]],
                       input_text: Optional[str],
                       interactive: bool) -> CommandResult:
        pipe = None if interactive else asyncio.subprocess.PIPE
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.PIPE if input_text is not None else None,
                stdout=pipe,
                stderr=pipe,
                cwd=cwd,
                env=self._build_env(env)
            )
        except FileNotFoundError as e:
            if check:
                raise CommandError(argv, 127, str(e)) from e
            return CommandResult(argv=argv, returncode=127, stderr=str(e))

        stdout, stderr = await process.communicate(
            input_text.encode() if input_text is not None else None
        )
        out = stdout.decode(errors="replace") if stdout else ""
        err = stderr.decode(errors="replace") if stderr else ""

        if out:
            self.logger.debug(f"STDOUT {out.strip()}")
        if err:
            self.logger.debug(f"STDERR {err.strip()}")

        if check and process.returncode != 0:
            raise CommandError(argv, process.returncode, err)

        return CommandResult(argv=argv, returncode=process.returncode, stdout=out, stderr=err)
