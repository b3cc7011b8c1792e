"""Fake external toolchain for driver and CLI tests."""
from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

import pytest


class FakeToolchain:
    """Stands in for ``subprocess.run`` and ``shutil.which``.

    Produces the files each real tool would write and records every call.
    """

    def __init__(self, gem_root: Path | None = None) -> None:
        self.calls: list[list[str]] = []
        self.missing: set[str] = set()
        self.failing: set[str] = set()
        self.silent: set[str] = set()
        self.gem_root = gem_root

    def which(self, name: str) -> str | None:
        if name in self.missing:
            return None
        return f"/usr/bin/{name}"

    def tools_called(self) -> list[str]:
        return [Path(cmd[0]).name for cmd in self.calls]

    def run(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        cmd = [str(c) for c in cmd]
        self.calls.append(cmd)
        tool = Path(cmd[0]).name

        if tool in self.missing:
            raise FileNotFoundError(cmd[0])
        if tool in self.failing:
            return subprocess.CompletedProcess(cmd, 1, "", f"{tool}: boom\n")
        if tool in self.silent:
            return subprocess.CompletedProcess(cmd, 0, "", "")

        stdout = ""
        if tool == "mrbc":
            symbol = next(a[2:] for a in cmd if a.startswith("-B"))
            output = next(a[2:] for a in cmd if a.startswith("-o"))
            Path(output).write_text(
                f"const uint8_t {symbol}[] = {{0x52, 0x49, 0x54, 0x45}};\n",
                encoding="utf-8",
            )
        elif tool == "opal":
            stdout = f"/* opal: {Path(cmd[-1]).name} */\n"
        elif tool == "cc":
            output = cmd[cmd.index("-o") + 1]
            Path(output).write_bytes(b"\x7fELF-fake")
        elif tool == "simple2d":
            stdout = "-lsimple2d -lSDL2 -lGL -lm\n"
        elif tool == "gem":
            root = self.gem_root or Path("/nonexistent")
            stdout = f"{root / 'lib' / 'ruby2d.rb'}\n"
        return subprocess.CompletedProcess(cmd, 0, stdout, "")


@pytest.fixture
def toolchain(monkeypatch: pytest.MonkeyPatch, library_root: Path) -> FakeToolchain:
    fake = FakeToolchain(gem_root=library_root)
    monkeypatch.setattr("src.ruby2d_build.toolchain.subprocess.run", fake.run)
    monkeypatch.setattr("src.ruby2d_build.toolchain.shutil.which", fake.which)
    return fake
