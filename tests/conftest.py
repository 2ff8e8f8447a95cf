"""Pytest configuration for swiftgate tests.

Provides a fake in-memory checker and a fake `swift` executable so the
suite never needs a real Swift toolchain.
"""

import os
import stat
import sys
from pathlib import Path

import pytest

from swiftgate.config import GateConfig
from swiftgate.logging_config import disable_logging
from swiftgate.models import CheckResult

FAKE_SWIFT = '''#!{python}
"""Stand-in for `swift -parse`: flags unbalanced brackets."""
import sys

path = sys.argv[-1]
with open(path) as f:
    source = f.read()

pairs = {{")": "(", "]": "[", "}}": "{{"}}
stack = []
for lineno, line in enumerate(source.splitlines() or [""], start=1):
    for ch in line:
        if ch in "([{{":
            stack.append((ch, lineno))
        elif ch in pairs:
            if not stack or stack[-1][0] != pairs[ch]:
                print(f"{{path}}:{{lineno}}:1: error: unexpected '{{ch}}'")
                sys.exit(1)
            stack.pop()

if stack:
    ch, lineno = stack[-1]
    print(f"{{path}}:{{lineno}}:1: error: expected closing bracket for '{{ch}}'", file=sys.stderr)
    sys.exit(1)
'''


class FakeChecker:
    """In-memory SyntaxChecker that records calls."""

    def __init__(self, ok: bool = True, diagnostics: str = "", error: Exception | None = None):
        self.ok = ok
        self.diagnostics = diagnostics
        self.error = error
        self.calls: list[Path] = []

    def check(self, path: Path) -> CheckResult:
        self.calls.append(path)
        if self.error is not None:
            raise self.error
        return CheckResult(ok=self.ok, diagnostics=self.diagnostics)


@pytest.fixture
def fake_checker():
    """A checker that accepts every file."""
    return FakeChecker()


@pytest.fixture
def quiet_config(tmp_path):
    """Default config with logging sent to a temp directory."""
    return GateConfig(log_dir=str(tmp_path / "logs"), logging_enabled=False)


@pytest.fixture
def fake_swift(tmp_path, monkeypatch):
    """Put a fake `swift` executable at the front of PATH.

    Returns the bin directory containing it.
    """
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    script = bin_dir / "swift"
    script.write_text(FAKE_SWIFT.format(python=sys.executable))
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    return bin_dir


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Keep config and logs from touching the real home or project."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("SWIFTGATE_CONFIG", str(tmp_path / "no-such-config.yaml"))
    monkeypatch.setenv("SWIFTGATE_LOG_DIR", str(tmp_path / "logs"))
    for var in ("SWIFTGATE_SWIFT_COMMAND", "SWIFTGATE_EXTENSIONS", "SWIFTGATE_LOG_LEVEL", "SWIFTGATE_LOGGING"):
        monkeypatch.delenv(var, raising=False)
    return home


@pytest.fixture
def swift_files(tmp_path):
    """A valid and an invalid Swift source file."""
    src = tmp_path / "src"
    src.mkdir()
    ok = src / "ok.swift"
    ok.write_text("struct Point {\n    let x: Int\n    let y: Int\n}\n")
    bad = src / "bad.swift"
    bad.write_text("func broken() {\n    print(\"oops\")\n")
    return {"ok": ok, "bad": bad}


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach any file handlers a test configured."""
    yield
    disable_logging()
