# yanker/core/cargo.py

"""
Runs `cargo yank` for a list of versions.

Versions are yanked one at a time, in the order given. Authentication and
the registry write are left entirely to cargo.
"""

import asyncio
import shlex
from dataclasses import dataclass, field
from typing import List, Optional

from yanker.core.console import ConsoleAware, Console
from yanker.core.constants import DEFAULT_CARGO_COMMAND
from yanker.core.exceptions import CargoNotFoundError, YankFailedError


@dataclass
class YankReport:
    """Outcome of one yank run."""
    yanked: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed

    def raise_for_failures(self) -> None:
        if self.failed:
            raise YankFailedError(self.failed, self.skipped)


class CargoYanker(ConsoleAware):
    """Spawns `cargo yank --vers <version>` sequentially."""

    def __init__(self, cargo_command: Optional[List[str]] = None,
                 console: Optional[Console] = None, verbose: bool = False):
        super().__init__(console, verbose)
        self.cargo_command = list(cargo_command) if cargo_command else [DEFAULT_CARGO_COMMAND]

    def build_args(self, version: str) -> List[str]:
        return [*self.cargo_command, "yank", "--vers", version]

    async def yank(self, version: str) -> int:
        """
        Yank a single version and wait for cargo to exit.

        Returns:
            cargo's exit code

        Raises:
            CargoNotFoundError: cargo could not be started
        """
        args = self.build_args(version)
        self.log(f"$ {shlex.join(args)}")

        try:
            process = await asyncio.create_subprocess_exec(*args)
        except OSError as e:
            raise CargoNotFoundError(shlex.join(self.cargo_command), e.strerror or str(e))

        return_code = await process.wait()
        self.log(f"  Exit code: {return_code}")
        return return_code

    async def yank_all(self, versions: List[str], fail_fast: bool = False) -> YankReport:
        """
        Yank every version in order, awaiting each before the next.

        A non-zero exit is recorded in the report; with fail_fast the
        remaining versions are not attempted and end up in `skipped`.
        """
        report = YankReport()
        for index, version in enumerate(versions):
            return_code = await self.yank(version)
            if return_code == 0:
                report.yanked.append(version)
                self.print(f"  [green]✓[/] {version}")
                continue

            report.failed.append(version)
            self.print(f"  [red]✗[/] {version} (cargo exited with code {return_code})")
            if fail_fast:
                report.skipped.extend(versions[index + 1:])
                break

        return report
