"""Property-based tests for template serialization."""

import json

import pytest
import yaml
from hypothesis import given, settings
from hypothesis import strategies as st

from prettylog.colors import Color, ColorCodec, CustomColor
from prettylog.levels import Severity, Verbosity
from prettylog.logger import Logger
from prettylog.output import OnDropPolicy
from prettylog.schemas import LoggerSettings
from prettylog.template import (
    build_formatter,
    capture_settings,
    dump_settings,
    parse_settings,
)

printable = st.characters(min_codepoint=32, max_codepoint=126)
header_text = st.text(alphabet=printable, max_size=12)
color_names = st.sampled_from([str(c) for c in Color])
# CSI sequences, including ones that duplicate a named color's escape
custom_colors = st.builds(
    CustomColor,
    st.text(alphabet="0123456789;", max_size=12).map(lambda body: f"\x1b[{body}m"),
) | st.sampled_from([c for c in Color if c is not Color.NONE]).map(
    lambda c: CustomColor(c.value)
)
color_values = color_names | custom_colors.map(ColorCodec.to_name)


@st.composite
def logger_settings(draw) -> LoggerSettings:
    """Random persistable settings with file output disabled."""
    headers = {s.value: draw(header_text) for s in Severity}
    colors = {s.value: draw(color_values) for s in Severity}
    return LoggerSettings.model_validate(
        {
            "verbosity": draw(st.sampled_from([v.value for v in Verbosity])),
            "filtering_enabled": draw(st.booleans()),
            "formatter": {
                "log_format": draw(st.text(alphabet=printable, max_size=10))
                + "%m"
                + draw(st.text(alphabet=printable, max_size=10)),
                "datetime_format": draw(st.sampled_from(["%H:%M", "%Y", "[%d/%m]", "x"])),
                "header_color_enabled": draw(st.booleans()),
                "headers": headers,
                "colors": colors,
            },
            "output": {
                "enabled": draw(st.booleans()),
                "console_enabled": draw(st.booleans()),
                "buffer_enabled": draw(st.booleans()),
                "file": {
                    "max_buffer_size": draw(
                        st.none() | st.integers(min_value=0, max_value=10_000)
                    ),
                    "on_drop_policy": draw(st.sampled_from([p.value for p in OnDropPolicy])),
                },
            },
        }
    )


@pytest.mark.property
@pytest.mark.unit
class TestTemplateRoundTrip:
    """Serialization round-trip laws."""

    @given(original=logger_settings())
    def test_json_roundtrip(self, original: LoggerSettings) -> None:
        text = dump_settings(original, "json")
        assert parse_settings(json.loads(text)) == original

    @given(original=logger_settings())
    def test_yaml_roundtrip(self, original: LoggerSettings) -> None:
        text = dump_settings(original, "yaml")
        assert parse_settings(yaml.safe_load(text)) == original

    @given(original=logger_settings())
    @settings(max_examples=50)
    def test_apply_then_capture(self, original: LoggerSettings) -> None:
        """Applying settings to a fresh logger and capturing them is lossless."""
        logger = Logger()
        logger.apply_settings(original)
        assert capture_settings(logger) == original

    @given(
        severity=st.sampled_from(list(Severity)),
        color=custom_colors,
        fmt=st.sampled_from(["json", "yaml"]),
    )
    def test_custom_color_survives_persistence(
        self, severity: Severity, color: CustomColor, fmt: str
    ) -> None:
        """A custom color reloads as the same custom color, in either format."""
        logger = Logger()
        logger.set_color(severity, color)
        text = dump_settings(logger.settings(), fmt)
        data = json.loads(text) if fmt == "json" else yaml.safe_load(text)
        restored = build_formatter(parse_settings(data).formatter)
        assert restored.header_color(severity) == color
        assert restored == logger.formatter
