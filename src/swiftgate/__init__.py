"""swiftgate - Swift syntax gate for Claude Code PostToolUse hooks."""

__version__ = "0.2.0"
