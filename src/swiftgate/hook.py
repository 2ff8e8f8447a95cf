"""PostToolUse hook entry point: syntax-check Swift files after Edit/Write.

Reads the Claude Code hook payload from stdin and exits with:
- 0: allow (out of scope, file missing, or syntax OK); nothing on stderr
- 2: block; stderr carries the marker line and the raw checker output
- 1: the checker could not be run; stderr says so

Registered in .claude/settings.json by `swiftgate-init`.
"""

import sys
from typing import TextIO

from .checker import SwiftParseChecker, SyntaxChecker
from .config import GateConfig, load_config
from .errors import ConfigError
from .gate import evaluate, exit_code_for, render_verdict
from .logging_config import configure_logging, disable_logging, get_logger
from .models import ChangeEvent

logger = get_logger("hook")


def _setup(config: GateConfig, config_error: ConfigError | None) -> None:
    """Configure logging without ever failing the hook."""
    if config.logging_enabled:
        try:
            configure_logging(log_dir=config.log_dir, log_level=config.log_level)
        except OSError:
            disable_logging()
    else:
        disable_logging()

    if config_error is not None:
        logger.warning(f"Ignoring invalid configuration, using defaults: {config_error}")


def run(
    stdin: TextIO,
    stderr: TextIO,
    checker: SyntaxChecker | None = None,
    config: GateConfig | None = None,
) -> int:
    """Process one event and return the exit code."""
    config_error = None
    if config is None:
        try:
            config = load_config()
        except ConfigError as e:
            config_error = e
            config = GateConfig()
    _setup(config, config_error)

    try:
        raw = stdin.read()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read hook input: {e}")
        raw = ""

    event = ChangeEvent.from_payload(raw)
    checker = checker or SwiftParseChecker(config.swift_command)
    verdict = evaluate(event, checker, config)

    message = render_verdict(verdict)
    if message:
        print(message, file=stderr)

    return exit_code_for(verdict)


def main():
    sys.exit(run(sys.stdin, sys.stderr))


if __name__ == "__main__":
    main()
