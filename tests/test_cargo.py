# tests/test_cargo.py

"""Tests for the sequential cargo yank runner."""

import asyncio
import sys
from pathlib import Path

import pytest

from yanker.core import cargo as cargo_module
from yanker.core.cargo import CargoYanker, YankReport
from yanker.core.exceptions import CargoNotFoundError, YankFailedError


class FakeProcess:
    def __init__(self, log, version, return_code):
        self.log = log
        self.version = version
        self.return_code = return_code

    async def wait(self):
        # Yield once so overlapping invocations would interleave in the log
        await asyncio.sleep(0)
        self.log.append(("exit", self.version))
        return self.return_code


@pytest.fixture
def fake_exec(monkeypatch):
    """Replace asyncio.create_subprocess_exec; returns (calls, log, exit codes)."""
    calls = []
    log = []
    exit_codes = {}

    async def create_subprocess_exec(*args, **kwargs):
        calls.append(list(args))
        version = args[-1]
        log.append(("spawn", version))
        return FakeProcess(log, version, exit_codes.get(version, 0))

    monkeypatch.setattr(cargo_module.asyncio, "create_subprocess_exec", create_subprocess_exec)
    return calls, log, exit_codes


def test_build_args_default_cargo():
    assert CargoYanker().build_args("0.1.0") == ["cargo", "yank", "--vers", "0.1.0"]


def test_build_args_custom_command():
    yanker = CargoYanker(["cargo", "+nightly"])
    assert yanker.build_args("1.0.0") == ["cargo", "+nightly", "yank", "--vers", "1.0.0"]


def test_yank_all_runs_sequentially_in_order(fake_exec):
    calls, log, _ = fake_exec

    report = asyncio.run(CargoYanker().yank_all(["0.2.0", "0.1.1", "0.1.0"]))

    assert calls == [
        ["cargo", "yank", "--vers", "0.2.0"],
        ["cargo", "yank", "--vers", "0.1.1"],
        ["cargo", "yank", "--vers", "0.1.0"],
    ]
    assert log == [
        ("spawn", "0.2.0"), ("exit", "0.2.0"),
        ("spawn", "0.1.1"), ("exit", "0.1.1"),
        ("spawn", "0.1.0"), ("exit", "0.1.0"),
    ]
    assert report.yanked == ["0.2.0", "0.1.1", "0.1.0"]
    assert report.ok


def test_keep_going_collects_failures(fake_exec):
    calls, _, exit_codes = fake_exec
    exit_codes["0.1.1"] = 101

    report = asyncio.run(CargoYanker().yank_all(["0.2.0", "0.1.1", "0.1.0"]))

    assert len(calls) == 3
    assert report.yanked == ["0.2.0", "0.1.0"]
    assert report.failed == ["0.1.1"]
    assert report.skipped == []
    assert not report.ok


def test_fail_fast_stops_after_first_failure(fake_exec):
    calls, _, exit_codes = fake_exec
    exit_codes["0.1.1"] = 1

    report = asyncio.run(CargoYanker().yank_all(["0.2.0", "0.1.1", "0.1.0"], fail_fast=True))

    assert [c[-1] for c in calls] == ["0.2.0", "0.1.1"]
    assert report.failed == ["0.1.1"]
    assert report.skipped == ["0.1.0"]


def test_raise_for_failures():
    YankReport(yanked=["0.1.0"]).raise_for_failures()

    with pytest.raises(YankFailedError) as exc:
        YankReport(yanked=["0.2.0"], failed=["0.1.1"], skipped=["0.1.0"]).raise_for_failures()

    assert exc.value.failed == ["0.1.1"]
    assert exc.value.skipped == ["0.1.0"]
    assert "0.1.1" in str(exc.value)


def test_missing_cargo_raises(tmp_path: Path):
    yanker = CargoYanker([str(tmp_path / "no-such-cargo")])

    with pytest.raises(CargoNotFoundError) as exc:
        asyncio.run(yanker.yank_all(["0.1.0", "0.2.0"]))

    assert "no-such-cargo" in str(exc.value)


@pytest.mark.skipif(sys.platform == "win32", reason="uses a POSIX argv recorder")
def test_real_subprocess_receives_arguments(tmp_path: Path):
    record = tmp_path / "calls.txt"
    script = tmp_path / "fake_cargo.py"
    script.write_text(
        "import sys\n"
        f"with open({str(record)!r}, 'a') as f:\n"
        "    f.write(' '.join(sys.argv[1:]) + '\\n')\n"
        "sys.exit(3 if sys.argv[-1] == '0.1.1' else 0)\n",
        encoding="utf-8",
    )

    yanker = CargoYanker([sys.executable, str(script)])
    report = asyncio.run(yanker.yank_all(["0.2.0", "0.1.1", "0.1.0"]))

    assert record.read_text(encoding="utf-8").splitlines() == [
        "yank --vers 0.2.0",
        "yank --vers 0.1.1",
        "yank --vers 0.1.0",
    ]
    assert report.yanked == ["0.2.0", "0.1.0"]
    assert report.failed == ["0.1.1"]
