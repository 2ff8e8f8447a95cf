"""Install the swiftgate hook into a Claude Code project."""

import copy
import json
import os
import shlex
import shutil
import subprocess
import sys
import tempfile
from pathlib import Path

from .config import load_config
from .errors import ConfigError
from .logging_config import get_logger

logger = get_logger("init")

HOOK_TEMPLATES_DIR = Path(__file__).parent / "hook_templates"
HOOK_FILE_NAME = "swift-parse-check.py"
VERSION_MARKER = ".swiftgate-version"
HOOK_MATCHER = "Edit|Write"
DEFAULT_TIMEOUT = 10  # seconds; enforced by Claude Code, not by the hook


def get_python_path() -> str:
    """Get the path to the Python interpreter that has swiftgate installed."""
    return sys.executable


def get_hook_command() -> str:
    """Command Claude Code runs for the hook."""
    return f'{shlex.quote(get_python_path())} "$CLAUDE_PROJECT_DIR/.claude/hooks/{HOOK_FILE_NAME}"'


def _get_hook_version() -> str:
    """Version of the bundled hook template."""
    version_file = HOOK_TEMPLATES_DIR / "VERSION"
    if version_file.exists():
        return version_file.read_text().strip()
    return "unknown"


def build_hook_settings(timeout: int = DEFAULT_TIMEOUT) -> dict:
    """Settings fragment registering the hook for Edit/Write."""
    return {
        "hooks": {
            "PostToolUse": [
                {
                    "matcher": HOOK_MATCHER,
                    "hooks": [
                        {
                            "type": "command",
                            "command": get_hook_command(),
                            "timeout": timeout,
                        }
                    ],
                }
            ]
        }
    }


def _is_swiftgate_hook(hook: dict) -> bool:
    return isinstance(hook, dict) and HOOK_FILE_NAME in str(hook.get("command", ""))


def _find_swiftgate_hook(entries: list) -> dict | None:
    for entry in entries:
        if not isinstance(entry, dict) or not isinstance(entry.get("hooks"), list):
            continue
        for hook in entry["hooks"]:
            if _is_swiftgate_hook(hook):
                return hook
    return None


def _merge_settings(existing: dict, new: dict) -> bool:
    """Merge swiftgate hook entries into existing settings in place.

    Other settings and other hooks are preserved. An existing swiftgate hook
    is refreshed rather than duplicated.

    Returns:
        True if `existing` was changed.
    """
    changed = False
    hooks = existing.setdefault("hooks", {})
    if not isinstance(hooks, dict):
        raise ValueError("'hooks' must be a JSON object")

    for hook_type, new_entries in new["hooks"].items():
        current = hooks.setdefault(hook_type, [])
        if not isinstance(current, list):
            raise ValueError(f"'hooks.{hook_type}' must be a JSON array")

        for new_entry in new_entries:
            wanted = new_entry["hooks"][0]
            found = _find_swiftgate_hook(current)
            if found is None:
                current.append(copy.deepcopy(new_entry))
                changed = True
            elif found != wanted:
                found.clear()
                found.update(wanted)
                changed = True

    return changed


def init_claude_hooks(
    project_dir: Path,
    dry_run: bool = False,
    force: bool = False,
    timeout: int = DEFAULT_TIMEOUT,
) -> dict:
    """
    Install the swiftgate hook into a project directory.

    Creates:
    - .claude/hooks/swift-parse-check.py   (PostToolUse hook)
    - .claude/hooks/.swiftgate-version     (template version marker)
    - .claude/settings.json                (hook registration, merged)

    Args:
        project_dir: The project directory to initialize
        dry_run: If True, don't write changes, just report what would happen
        force: Overwrite an existing hook script
        timeout: Hook timeout in seconds written to settings.json

    Returns dict with status info.
    """
    results = {
        "created": [],
        "would_create": [],
        "updated": [],
        "would_update": [],
        "skipped": [],
        "errors": [],
    }

    hooks_dir = project_dir / ".claude" / "hooks"
    settings_file = project_dir / ".claude" / "settings.json"
    hook_file = hooks_dir / HOOK_FILE_NAME
    template = (HOOK_TEMPLATES_DIR / HOOK_FILE_NAME).read_text()

    if not dry_run:
        hooks_dir.mkdir(parents=True, exist_ok=True)

    # Hook script
    if hook_file.exists() and not force:
        results["skipped"].append(str(hook_file))
    elif hook_file.exists():
        if hook_file.read_text() == template:
            results["skipped"].append(str(hook_file))
        elif dry_run:
            results["would_update"].append(str(hook_file))
        else:
            hook_file.write_text(template)
            hook_file.chmod(0o755)
            results["updated"].append(str(hook_file))
    elif dry_run:
        results["would_create"].append(str(hook_file))
    else:
        hook_file.write_text(template)
        hook_file.chmod(0o755)
        results["created"].append(str(hook_file))

    if not dry_run:
        (hooks_dir / VERSION_MARKER).write_text(_get_hook_version() + "\n")

    # Settings - MERGE, don't replace
    new_settings = build_hook_settings(timeout)
    if settings_file.exists():
        try:
            existing = json.loads(settings_file.read_text())
        except json.JSONDecodeError:
            results["errors"].append(f"Could not parse existing {settings_file}")
            return results

        if not isinstance(existing, dict):
            results["errors"].append(
                f"{settings_file} must contain a JSON object, not {type(existing).__name__}"
            )
            return results

        try:
            changed = _merge_settings(existing, new_settings)
        except ValueError as e:
            results["errors"].append(f"Unexpected layout in {settings_file}: {e}")
            return results

        if not changed:
            results["skipped"].append(str(settings_file))
        elif dry_run:
            results["would_update"].append(str(settings_file))
        else:
            settings_file.write_text(json.dumps(existing, indent=2) + "\n")
            results["updated"].append(str(settings_file))
    elif dry_run:
        results["would_create"].append(str(settings_file))
    else:
        settings_file.write_text(json.dumps(new_settings, indent=2) + "\n")
        results["created"].append(str(settings_file))

    logger.info(f"Hook install in {project_dir}: {results}")
    return results


def diagnose(project_dir: Path) -> dict:
    """
    Diagnose the swiftgate setup of a project.

    Returns dict with diagnostic results.
    """
    results = {
        "checker": {"command": None, "path": None},
        "hook_installed": False,
        "hook_executable": False,
        "hook_registered": False,
        "issues": [],
        "suggestions": [],
    }

    try:
        config = load_config(env={**os.environ, "CLAUDE_PROJECT_DIR": str(project_dir)})
    except ConfigError as e:
        results["issues"].append(f"Invalid configuration: {e}")
        config = None

    if config is not None:
        binary = config.swift_command[0]
        results["checker"]["command"] = " ".join(config.swift_command)
        results["checker"]["path"] = shutil.which(binary)
        if results["checker"]["path"] is None:
            results["issues"].append(f"Syntax checker not found on PATH: {binary}")
            results["suggestions"].append(
                "Install the Swift toolchain or set swift_command in .claude/swiftgate.yaml"
            )

    hook_file = project_dir / ".claude" / "hooks" / HOOK_FILE_NAME
    if hook_file.exists():
        results["hook_installed"] = True
        results["hook_executable"] = os.access(hook_file, os.X_OK)
        if not results["hook_executable"]:
            results["issues"].append(f"Hook is not executable: {hook_file}")
            results["suggestions"].append(f"chmod +x {hook_file}")
    else:
        results["issues"].append(f"Hook not installed: {hook_file}")
        results["suggestions"].append("Run 'swiftgate-init' in the project directory")

    settings_file = project_dir / ".claude" / "settings.json"
    if settings_file.exists():
        try:
            settings = json.loads(settings_file.read_text())
            entries = settings.get("hooks", {}).get("PostToolUse", []) if isinstance(settings, dict) else []
            results["hook_registered"] = (
                isinstance(entries, list) and _find_swiftgate_hook(entries) is not None
            )
        except (json.JSONDecodeError, AttributeError):
            results["issues"].append(f"Could not parse {settings_file}")
    if not results["hook_registered"]:
        results["issues"].append("Hook is not registered under PostToolUse in .claude/settings.json")
        results["suggestions"].append("Run 'swiftgate-init' to register it")

    return results


VERIFY_CASES = [
    # (name, file name, contents or None for a non-existent file, expected exit)
    ("non-swift file is ignored", "notes.txt", "hello", 0),
    ("missing swift file is ignored", "missing.swift", None, 0),
    ("valid swift passes", "ok.swift", "let x = 1\n", 0),
    ("invalid swift blocks", "bad.swift", "func broken( {\n", 2),
]


def verify_setup(project_dir: Path) -> dict:
    """
    Run the installed hook end-to-end against sample files.

    Returns dict with verification results.
    """
    results = {
        "hook_installed": False,
        "checks": [],
        "errors": [],
    }

    hook_file = project_dir / ".claude" / "hooks" / HOOK_FILE_NAME
    if not hook_file.exists():
        results["errors"].append(f"Hook not installed: {hook_file}")
        return results
    results["hook_installed"] = True

    env = {**os.environ, "CLAUDE_PROJECT_DIR": str(project_dir)}

    with tempfile.TemporaryDirectory() as tmpdir:
        for name, file_name, contents, expected in VERIFY_CASES:
            target = Path(tmpdir) / file_name
            if contents is not None:
                target.write_text(contents)

            payload = json.dumps({"tool_name": "Write", "tool_input": {"file_path": str(target)}})
            try:
                proc = subprocess.run(
                    [get_python_path(), str(hook_file)],
                    input=payload,
                    capture_output=True,
                    text=True,
                    timeout=DEFAULT_TIMEOUT * 3,
                    cwd=str(project_dir),
                    env=env,
                )
            except subprocess.TimeoutExpired:
                results["errors"].append(f"{name}: hook timed out")
                continue

            results["checks"].append({
                "name": name,
                "expected": expected,
                "actual": proc.returncode,
                "passed": proc.returncode == expected,
                "stderr": proc.stderr.strip(),
            })

    return results


# ============================================================================
# Main CLI
# ============================================================================

def main():
    """CLI entry point for swiftgate-init."""
    import argparse

    parser = argparse.ArgumentParser(
        description="Install the swiftgate Swift syntax hook for Claude Code",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Creates in the project:
  .claude/hooks/{HOOK_FILE_NAME}   # PostToolUse hook (Edit|Write)
  .claude/settings.json            # Registers the hook (merged, not replaced)

Examples:
  swiftgate-init                   # Install into the current directory
  swiftgate-init ~/Code/MyApp      # Install into another project
  swiftgate-init --dry-run         # Show what would change
  swiftgate-init --doctor          # Diagnose an existing install
  swiftgate-init --verify          # Run the installed hook on sample files
        """,
    )

    parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Project directory (default: current directory)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be done without making changes",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing hook script with the bundled template",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=DEFAULT_TIMEOUT,
        help=f"Hook timeout in seconds (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "--doctor",
        action="store_true",
        help="Diagnose the project's swiftgate setup",
    )
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Run the installed hook against sample files",
    )

    args = parser.parse_args()
    project_dir = Path(args.directory).resolve()

    if args.timeout <= 0:
        parser.error("--timeout must be positive")

    if args.doctor:
        print("\n  Diagnosing swiftgate setup...\n")
        results = diagnose(project_dir)

        checker = results["checker"]
        if checker["path"]:
            print(f"    ✓ Checker: {checker['command']} ({checker['path']})")
        else:
            print(f"    ✗ Checker: {checker['command'] or 'unknown'} not found")
        print(f"    {'✓' if results['hook_installed'] else '✗'} Hook installed")
        print(f"    {'✓' if results['hook_executable'] else '✗'} Hook executable")
        print(f"    {'✓' if results['hook_registered'] else '✗'} Hook registered in settings.json")

        if results["issues"]:
            print("\n  Issues found:")
            for issue in results["issues"]:
                print(f"    ! {issue}")
        if results["suggestions"]:
            print("\n  Suggestions:")
            for suggestion in results["suggestions"]:
                print(f"    → {suggestion}")

        if results["issues"]:
            print("\n  Status: Issues found - see above\n")
            sys.exit(1)
        print("\n  Status: Configuration looks good!\n")
        return

    if args.verify:
        print("\n  Verifying swiftgate hook...\n")
        results = verify_setup(project_dir)

        for check in results["checks"]:
            mark = "✓" if check["passed"] else "✗"
            print(f"    {mark} {check['name']} (exit {check['actual']}, expected {check['expected']})")
            if not check["passed"] and check["stderr"]:
                for line in check["stderr"].splitlines()[:5]:
                    print(f"        {line}")

        if results["errors"]:
            print("\n  Errors:")
            for e in results["errors"]:
                print(f"    ! {e}")

        all_ok = (
            results["hook_installed"]
            and not results["errors"]
            and all(c["passed"] for c in results["checks"])
        )
        print(f"\n  Status: {'Ready to use!' if all_ok else 'Issues found - see above'}\n")
        if not all_ok:
            sys.exit(1)
        return

    dry_run = args.dry_run
    if dry_run:
        print("\n  DRY RUN - no changes will be made\n")
    print("  Installing swiftgate")
    print(f"  Project: {project_dir}\n")

    hook_results = init_claude_hooks(
        project_dir, dry_run=dry_run, force=args.force, timeout=args.timeout
    )

    for f in hook_results["created"]:
        print(f"    + {f}")
    for f in hook_results["would_create"]:
        print(f"    ? {f} (would create)")
    for f in hook_results["updated"]:
        print(f"    ~ {f}")
    for f in hook_results["would_update"]:
        print(f"    ? {f} (would update)")
    for f in hook_results["skipped"]:
        print(f"    = {f} (already up to date)")
    for e in hook_results["errors"]:
        print(f"    ! {e}")

    if hook_results["errors"]:
        print("\n  Finished with errors - see above.\n")
        sys.exit(1)
    if dry_run:
        print("\n  Dry run complete. Run without --dry-run to apply changes.\n")
    else:
        print("\n  Done! Restart Claude Code for the hook to take effect.\n")


if __name__ == "__main__":
    main()
