"""
Tests for diagnostic entries and their formatting.
"""

import pytest

from compile_driver import DiagnosticEntry, Location, PathDisplayMode
from compile_driver.core.diagnostics import (
    DescriptionFormatters,
    DiagnosticFormatter,
    build_failure_result,
    build_success_result,
    format_diagnostic_groups,
    warning_prefix,
)

BUILD = {"compiler_source_format": "build"}


class LintModule:
    """Stands in for a compiler module that formats its own descriptions."""

    @staticmethod
    def format_error(description):
        return f"lint: {description}"


class TestDiagnosticEntries:
    """Test the three raw diagnostic shapes."""

    def test_bare_entry(self) -> None:
        entry = DiagnosticEntry.from_tuple(("mod", "desc"))
        assert entry == DiagnosticEntry(module="mod", description="desc", location=None)

    def test_line_entry(self) -> None:
        entry = DiagnosticEntry.from_tuple((12, "mod", "desc"))
        assert entry.location == Location(line=12)
        assert str(entry.location) == "12"

    def test_line_column_entry(self) -> None:
        entry = DiagnosticEntry.from_tuple(((12, 4), "mod", "desc"))
        assert entry.location == Location(line=12, column=4)
        assert str(entry.location) == "12:4"

    def test_entry_passthrough(self) -> None:
        entry = DiagnosticEntry("mod", "desc")
        assert DiagnosticEntry.from_tuple(entry) is entry

    def test_unsupported_shape(self) -> None:
        with pytest.raises(ValueError):
            DiagnosticEntry.from_tuple(("only-one",))


class TestFormatting:
    """Test diagnostic line formatting."""

    def test_line_shapes(self) -> None:
        """Test each location shape renders its own line form."""
        groups = [
            (
                "src/a.erl",
                [((3, 7), "m", "bad token"), (3, "m", "bad line"), ("m", "bad file")],
            )
        ]

        lines = format_diagnostic_groups(groups, PathDisplayMode.BUILD)

        assert lines == [
            "src/a.erl:3:7: bad token\n",
            "src/a.erl:3: bad line\n",
            "src/a.erl: bad file\n",
        ]

    def test_group_then_entry_order(self) -> None:
        """Test lines follow group order, then entry order."""
        groups = [
            ("b.erl", [(2, "m", "second"), (1, "m", "first")]),
            ("a.erl", [(9, "m", "third")]),
        ]

        lines = format_diagnostic_groups(groups, PathDisplayMode.BUILD)

        assert lines == ["b.erl:2: second\n", "b.erl:1: first\n", "a.erl:9: third\n"]

    def test_prefix_applied(self) -> None:
        """Test the prefix precedes the description."""
        lines = format_diagnostic_groups(
            [("a.erl", [(1, "m", "unused")])], PathDisplayMode.BUILD, prefix="Warning: "
        )
        assert lines == ["a.erl:1: Warning: unused\n"]

    def test_registered_formatter(self) -> None:
        """Test descriptions are rendered by the formatter for their module."""
        formatters = DescriptionFormatters({"erl_lint": lambda desc: f"variable {desc[1]} unused"})

        lines = format_diagnostic_groups(
            [("a.erl", [(4, "erl_lint", ("unused_var", "X"))])],
            PathDisplayMode.BUILD,
            formatters=formatters,
        )

        assert lines == ["a.erl:4: variable X unused\n"]

    def test_module_object_formats_itself(self) -> None:
        """Test a module exposing format_error is used directly."""
        formatter = DiagnosticFormatter(path_mode=PathDisplayMode.BUILD)
        line = formatter.format_entry("a.erl", "", DiagnosticEntry(LintModule, "shadowed"))
        assert line == "a.erl: lint: shadowed\n"

    def test_unknown_module_falls_back_to_str(self) -> None:
        """Test unknown modules render the description with str."""
        formatters = DescriptionFormatters()
        assert formatters.format("nobody", ("x", 1)) == "('x', 1)"
        assert formatters.format(["unhashable"], "text") == "text"

    def test_register(self) -> None:
        formatters = DescriptionFormatters()
        formatters.register("m", str.upper)
        assert "m" in formatters
        assert formatters.format("m", "loud") == "LOUD"


class TestResults:
    """Test success and failure result builders."""

    def test_warning_prefix_modes(self) -> None:
        """Test warnings_as_errors controls the prefix in both config forms."""
        assert warning_prefix({"warnings_as_errors": True}) == ""
        assert warning_prefix(["warnings_as_errors"]) == ""
        assert warning_prefix({"warnings_as_errors": False}) == "Warning: "
        assert warning_prefix({}) == "Warning: "
        assert warning_prefix([]) == "Warning: "

    def test_failure_warnings_as_errors(self) -> None:
        """Test warnings lose their prefix when treated as errors."""
        warnings = [("a.erl", [(1, "m", "unused")])]
        config = dict(BUILD, warnings_as_errors=True)

        strict = build_failure_result("a.erl", [], warnings, config)
        lenient = build_failure_result("a.erl", [], warnings, BUILD)

        assert strict.warnings == ["a.erl:1: unused\n"]
        assert lenient.warnings == ["a.erl:1: Warning: unused\n"]

    def test_failure_errors_never_prefixed(self) -> None:
        """Test errors carry no prefix and come before warnings."""
        result = build_failure_result(
            "a.erl",
            [("a.erl", [(2, "m", "syntax error")])],
            [("a.erl", [(5, "m", "unused")])],
            [("compiler_source_format", "build")],
        )

        assert not result
        assert result.errors == ["a.erl:2: syntax error\n"]
        assert result.lines == ["a.erl:2: syntax error\n", "a.erl:5: Warning: unused\n"]

    def test_success_result(self) -> None:
        """Test success results pair prefixed warnings with success."""
        result = build_success_result("a.erl", [("a.erl", [("m", "deprecated")])], BUILD)

        assert result
        assert result.errors == []
        assert result.warnings == ["a.erl: Warning: deprecated\n"]

    def test_success_warnings_as_errors(self) -> None:
        config = dict(BUILD, warnings_as_errors=True)

        result = build_success_result("a.erl", [("a.erl", [(7, "m", "deprecated")])], config)

        assert result
        assert result.warnings == ["a.erl:7: deprecated\n"]
