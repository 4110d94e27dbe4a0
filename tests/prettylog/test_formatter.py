"""
Tests for the log formatter.

Tests key functionality including:
- Placeholder substitution (%h, %d, %m, %c and unknown placeholders)
- Template validation
- Header text, colors and the coloring toggle
- Datetime formatting
"""

from datetime import datetime

import pytest

from prettylog.colors import Color, CustomColor
from prettylog.constants import LogConstants
from prettylog.event import LogEvent
from prettylog.exceptions import MissingMessagePlaceholderError, ValidationError
from prettylog.formatter import LogFormatter
from prettylog.levels import Severity

FIXED_TIME = datetime(2024, 1, 2, 3, 4, 5)


def _event(message: str = "msg", severity: Severity = Severity.INFO) -> LogEvent:
    return LogEvent(message, severity, FIXED_TIME)


# =============================================================================
# Test Defaults
# =============================================================================


@pytest.mark.unit
class TestDefaults:
    """Test the default formatter configuration."""

    def test_default_template(self):
        formatter = LogFormatter()
        assert formatter.log_format == "[%h] %m"
        assert formatter.datetime_format == "%Y-%m-%d %H:%M:%S"
        assert formatter.header_color_enabled is True

    def test_default_headers(self):
        headers = LogFormatter().headers
        assert headers == {
            Severity.DEBUG: "DBG",
            Severity.INFO: "INF",
            Severity.WARNING: "WAR",
            Severity.ERROR: "ERR",
            Severity.FATAL_ERROR: "FATAL",
        }

    def test_default_colors(self):
        colors = LogFormatter().colors
        assert colors[Severity.DEBUG] is Color.BLUE
        assert colors[Severity.INFO] is Color.GREEN
        assert colors[Severity.WARNING] is Color.YELLOW
        assert colors[Severity.ERROR] is Color.RED
        assert colors[Severity.FATAL_ERROR] is Color.MAGENTA

    def test_default_error_line(self):
        rendered = LogFormatter().render(_event("disk full", Severity.ERROR))
        assert rendered == "[\x1b[31mERR\x1b[0m] disk full\n"

    def test_accessors_return_copies(self):
        formatter = LogFormatter()
        formatter.headers[Severity.INFO] = "changed"
        formatter.colors[Severity.INFO] = Color.NONE
        assert formatter.headers[Severity.INFO] == "INF"
        assert formatter.colors[Severity.INFO] is Color.GREEN


# =============================================================================
# Test Rendering
# =============================================================================


@pytest.mark.unit
class TestRender:
    """Test LogFormatter.render."""

    def test_markup_template_with_single_character_headers(self):
        formatter = LogFormatter()
        formatter.set_log_format("<l> <h>%h</h> <d>%d</d> <m>%m</m> </l>")
        formatter.set_datetime_format("aaa")
        for severity, header in zip(Severity, ["d", "i", "W", "E", "!"]):
            formatter.set_header(severity, header)

        rendered = formatter.render(_event("aaa", Severity.DEBUG))

        assert rendered == (
            "<l> <h>\x1b[34md\x1b[0m</h> <d>aaa</d> <m>aaa</m> </l>\n"
        )

    def test_plain_header(self, plain_formatter):
        assert plain_formatter.render(_event("disk full", Severity.ERROR)) == (
            "[ERR] disk full\n"
        )

    def test_datetime_placeholder(self, plain_formatter):
        plain_formatter.set_log_format("%d %m")
        assert plain_formatter.render(_event("x")) == "2024-01-02 03:04:05 x\n"

    def test_datetime_skipped_without_placeholder(self):
        formatter = LogFormatter()
        assert formatter.format_datetime(FIXED_TIME) == ""
        formatter.set_log_format("%d|%m")
        assert formatter.format_datetime(FIXED_TIME) == "2024-01-02 03:04:05"

    def test_count_placeholder(self, plain_formatter):
        plain_formatter.set_log_format("#%c %m")
        assert plain_formatter.render(_event("x"), count=7) == "#7 x\n"

    def test_count_without_counter_is_literal(self, plain_formatter):
        plain_formatter.set_log_format("#%c %m")
        assert plain_formatter.render(_event("x")) == "#c x\n"

    def test_unknown_placeholder_emits_character(self, plain_formatter):
        plain_formatter.set_log_format("%x%% %m")
        assert plain_formatter.render(_event("y")) == "x% y\n"

    def test_trailing_percent_emits_nothing(self, plain_formatter):
        plain_formatter.set_log_format("%m %")
        assert plain_formatter.render(_event("y")) == "y \n"

    def test_message_placeholders_inside_message_are_not_expanded(self, plain_formatter):
        assert plain_formatter.render(_event("100%m done")) == "[INF] 100%m done\n"

    def test_repeated_placeholders(self, plain_formatter):
        plain_formatter.set_log_format("%m-%m")
        assert plain_formatter.render(_event("a")) == "a-a\n"

    def test_every_line_ends_with_newline(self, plain_formatter):
        for severity in Severity:
            assert plain_formatter.render(_event("x", severity)).endswith("\n")


# =============================================================================
# Test Validation
# =============================================================================


@pytest.mark.unit
class TestValidation:
    """Test setter validation."""

    def test_missing_message_placeholder(self):
        formatter = LogFormatter()
        with pytest.raises(MissingMessagePlaceholderError) as exc_info:
            formatter.set_log_format("[%h] %d")
        assert exc_info.value.template == "[%h] %d"
        assert formatter.log_format == LogConstants.DEFAULT_LOG_FORMAT

    def test_missing_placeholder_is_validation_error(self):
        with pytest.raises(ValidationError):
            LogFormatter(log_format="no message")

    def test_non_string_template(self):
        with pytest.raises(ValidationError):
            LogFormatter().set_log_format(42)  # type: ignore[arg-type]

    def test_failed_set_keeps_datetime_visibility(self):
        formatter = LogFormatter(log_format="%d %m")
        with pytest.raises(ValidationError):
            formatter.set_log_format("%d only")
        assert formatter.format_datetime(FIXED_TIME) != ""

    def test_non_string_header(self):
        with pytest.raises(ValidationError):
            LogFormatter().set_header(Severity.INFO, 1)  # type: ignore[arg-type]

    def test_unknown_color(self):
        formatter = LogFormatter()
        with pytest.raises(ValidationError):
            formatter.set_color(Severity.INFO, "chartreuse")
        assert formatter.header_color(Severity.INFO) is Color.GREEN

    def test_non_string_datetime_format(self):
        with pytest.raises(ValidationError):
            LogFormatter().set_datetime_format(None)  # type: ignore[arg-type]


# =============================================================================
# Test Headers and Colors
# =============================================================================


@pytest.mark.unit
class TestHeaders:
    """Test header text and coloring."""

    def test_set_header_by_name(self):
        formatter = LogFormatter(header_color_enabled=False)
        formatter.set_header("warning", "WARN")
        assert formatter.header(Severity.WARNING) == "WARN"

    def test_set_color_variants(self):
        formatter = LogFormatter()
        formatter.set_color(Severity.INFO, "cyan")
        assert formatter.header(Severity.INFO) == "\x1b[36mINF\x1b[0m"
        formatter.set_color(Severity.INFO, 7)
        assert formatter.header_color(Severity.INFO) is Color.RED
        formatter.set_color(Severity.INFO, "\x1b[1m")
        assert formatter.header_color(Severity.INFO) == CustomColor("\x1b[1m")

    def test_color_none_leaves_header_plain(self):
        formatter = LogFormatter()
        formatter.set_color(Severity.INFO, Color.NONE)
        assert formatter.header(Severity.INFO) == "INF"

    def test_toggle_header_color(self):
        formatter = LogFormatter()
        formatter.toggle_header_color(False)
        assert formatter.header(Severity.ERROR) == "ERR"
        formatter.toggle_header_color(True)
        assert formatter.header(Severity.ERROR) == "\x1b[31mERR\x1b[0m"

    def test_constructor_overrides(self):
        formatter = LogFormatter(
            headers={"error": "E"},
            colors={Severity.ERROR: "none"},
        )
        assert formatter.render(_event("x", Severity.ERROR)) == "[E] x\n"


# =============================================================================
# Test Equality and Copy
# =============================================================================


@pytest.mark.unit
class TestEquality:
    """Test formatter comparison and copying."""

    def test_equal_defaults(self):
        assert LogFormatter() == LogFormatter()

    def test_copy_is_independent(self):
        original = LogFormatter()
        clone = original.copy()
        assert clone == original
        clone.set_header(Severity.INFO, "I")
        assert clone != original
        assert original.headers[Severity.INFO] == "INF"

    def test_custom_color_differs_from_named(self):
        a = LogFormatter(colors={"error": Color.RED})
        b = LogFormatter(colors={"error": CustomColor("\x1b[31m")})
        assert a != b

    def test_unhashable(self):
        with pytest.raises(TypeError):
            hash(LogFormatter())
