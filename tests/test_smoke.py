"""
Smoke tests for swiftgate.

These tests verify that the package imports and exposes its entry points.
They should be fast and catch obvious breakages.
"""


class TestImports:
    """Verify all modules can be imported without errors."""

    def test_import_hook(self):
        from swiftgate import hook
        assert callable(hook.main)
        assert callable(hook.run)

    def test_import_gate(self):
        from swiftgate.gate import evaluate, exit_code_for
        assert evaluate is not None
        assert exit_code_for is not None

    def test_import_init_project(self):
        from swiftgate.init_project import main
        assert main is not None

    def test_version(self):
        import swiftgate
        assert swiftgate.__version__ == "0.2.0"


class TestCheckerProtocol:
    """The real adapter satisfies the protocol shape."""

    def test_swift_parse_checker_has_check(self):
        from swiftgate.checker import SwiftParseChecker
        assert callable(getattr(SwiftParseChecker(), "check", None))
