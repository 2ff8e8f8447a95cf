"""Syntax checker adapters.

The gate only depends on the `SyntaxChecker` protocol. `SwiftParseChecker`
shells out to `swift -parse`; tests substitute an in-memory fake.
"""

import subprocess
from pathlib import Path
from typing import Protocol

from .errors import CheckerUnavailableError
from .logging_config import get_logger
from .models import CheckResult

logger = get_logger("checker")

DEFAULT_SWIFT_COMMAND = ["swift", "-parse"]


class SyntaxChecker(Protocol):
    """Anything that can syntax-check a single source file."""

    def check(self, path: Path) -> CheckResult:
        ...


class SwiftParseChecker:
    """Run a syntax-only compiler pass as a subprocess.

    Args:
        command: Command prefix; the file path is appended as the last argument.
    """

    def __init__(self, command: list[str] | None = None):
        self.command = list(command or DEFAULT_SWIFT_COMMAND)

    def check(self, path: Path) -> CheckResult:
        """Check one file, capturing stdout and stderr as a single stream.

        Raises:
            CheckerUnavailableError: If the command cannot be started.
        """
        argv = [*self.command, str(path)]
        logger.debug(f"Running {argv}")

        try:
            proc = subprocess.run(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
            )
        except FileNotFoundError:
            raise CheckerUnavailableError(self.command, "command not found") from None
        except PermissionError:
            raise CheckerUnavailableError(self.command, "permission denied") from None
        except OSError as e:
            raise CheckerUnavailableError(self.command, str(e)) from e

        logger.debug(f"{self.command[0]} exited {proc.returncode} for {path}")
        return CheckResult(ok=proc.returncode == 0, diagnostics=proc.stdout or "")
