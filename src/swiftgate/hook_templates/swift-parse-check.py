#!/usr/bin/env python3
"""PostToolUse hook for swiftgate v0.2.

Runs `swift -parse` on .swift files after Edit/Write so syntax errors are
caught before Claude moves on with broken code.

Exit 0 = allow, 2 = block (stderr is fed to Claude), 1 = checker unavailable.
"""
import sys

try:
    from swiftgate.hook import main
except ImportError:
    print(
        "swiftgate is not installed for this interpreter; "
        "re-run `swiftgate-init` from the environment that has it",
        file=sys.stderr,
    )
    sys.exit(1)

if __name__ == "__main__":
    main()
