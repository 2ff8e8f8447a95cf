"""Decision logic for the syntax gate.

One event in, one verdict out. The verdict is only turned into a process
exit code by `exit_code_for`, at the outermost boundary.
"""

from pathlib import Path

from .checker import SyntaxChecker
from .config import GateConfig
from .errors import CheckerUnavailableError
from .logging_config import get_logger
from .models import Allow, Block, ChangeEvent, Unavailable, Verdict

logger = get_logger("gate")

EXIT_ALLOW = 0
EXIT_UNAVAILABLE = 1
EXIT_BLOCK = 2  # Claude Code feeds stderr back to the model on exit 2


def evaluate(event: ChangeEvent, checker: SyntaxChecker, config: GateConfig | None = None) -> Verdict:
    """Decide whether the mutated file passes the gate.

    Args:
        event: Parsed stdin payload
        checker: Syntax checker to run against in-scope files
        config: Effective configuration (default: GateConfig())

    Returns:
        Allow, Block, or Unavailable. Never raises for checker failures.
    """
    config = config or GateConfig()
    file_path = event.file_path

    if not config.matches(file_path):
        logger.debug(f"Skipping out-of-scope path: {file_path!r}")
        return Allow(reason="out_of_scope")

    path = Path(file_path)
    try:
        exists = path.is_file()
    except (OSError, ValueError) as e:
        logger.info(f"Cannot stat {file_path!r}, treating as missing: {e}")
        exists = False
    if not exists:
        logger.info(f"Skipping missing file: {file_path}")
        return Allow(reason="file_missing")

    try:
        result = checker.check(path)
    except CheckerUnavailableError as e:
        logger.error(f"Checker unavailable for {file_path}: {e}")
        return Unavailable(path=file_path, detail=str(e))

    if result.ok:
        logger.info(f"Syntax OK: {file_path}")
        return Allow(reason="passed")

    logger.warning(f"Syntax error in {file_path}")
    return Block(path=file_path, diagnostics=result.diagnostics)


def exit_code_for(verdict: Verdict) -> int:
    """Map a verdict onto the hook's process exit code."""
    if isinstance(verdict, Block):
        return EXIT_BLOCK
    if isinstance(verdict, Unavailable):
        return EXIT_UNAVAILABLE
    return EXIT_ALLOW


def render_verdict(verdict: Verdict) -> str:
    """Text for stderr; empty for Allow."""
    if isinstance(verdict, (Block, Unavailable)):
        return verdict.to_message()
    return ""
