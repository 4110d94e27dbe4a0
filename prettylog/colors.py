"""
Color management for log headers.

This module maps symbolic colors to ANSI escape sequences and wraps text in
them. Named colors live in the Color enum (whose values are the escape
sequences themselves); CustomColor carries an arbitrary escape sequence.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .constants import LogConstants
from .exceptions import ValidationError


class Color(Enum):
    """Named terminal colors. The value is the literal escape sequence."""

    NONE = ""
    BLACK = "\x1b[30m"
    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    BLUE = "\x1b[34m"
    MAGENTA = "\x1b[35m"
    CYAN = "\x1b[36m"
    WHITE = "\x1b[37m"
    GRAY = "\x1b[90m"
    BRIGHT_RED = "\x1b[91m"
    BRIGHT_GREEN = "\x1b[92m"
    BRIGHT_YELLOW = "\x1b[93m"
    BRIGHT_BLUE = "\x1b[94m"
    BRIGHT_MAGENTA = "\x1b[95m"
    BRIGHT_CYAN = "\x1b[96m"
    BRIGHT_WHITE = "\x1b[97m"

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class CustomColor:
    """
    An arbitrary escape sequence used as a header color.

    The sequence must start with CSI (ESC "["), which keeps it distinct from
    color names when persisted.
    """

    escape: str

    def __post_init__(self) -> None:
        if not isinstance(self.escape, str) or not self.escape.startswith(
            LogConstants.ESCAPE_PREFIX
        ):
            raise ValidationError(
                "Custom color must be an escape sequence", value=repr(self.escape)
            )

    def __str__(self) -> str:
        return self.escape


ColorLike = Color | CustomColor

# Integer codes accepted for named colors, in the order the template format
# has always numbered them
_COLOR_INDEX: dict[int, Color] = {
    0: Color.NONE,
    1: Color.BLACK,
    2: Color.BLUE,
    3: Color.CYAN,
    4: Color.GREEN,
    5: Color.GRAY,
    6: Color.MAGENTA,
    7: Color.RED,
    8: Color.WHITE,
    9: Color.YELLOW,
}


class ColorCodec:
    """Stateless conversions between colors, escape sequences and names."""

    RESET = LogConstants.RESET

    @staticmethod
    def encode(color: ColorLike) -> str:
        """
        Get the escape sequence for a color.

        Args:
            color: Named or custom color

        Returns:
            Escape sequence ("" for Color.NONE, verbatim for custom colors)
        """
        if isinstance(color, CustomColor):
            return color.escape
        return color.value

    @staticmethod
    def wrap(text: str, color: ColorLike) -> str:
        """
        Wrap text in a color.

        Color.NONE leaves the text untouched, without a trailing reset.

        Examples:
            >>> ColorCodec.wrap("a", Color.RED)
            '\\x1b[31ma\\x1b[0m'
            >>> ColorCodec.wrap("a", Color.NONE)
            'a'
        """
        if color is Color.NONE:
            return text
        return ColorCodec.encode(color) + text + ColorCodec.RESET

    @staticmethod
    def from_name(color_name: str | None) -> Color | None:
        """
        Convert a color name to a Color.

        Supports:
        - Basic colors: "black", "red", "green", "yellow", "blue", "magenta", "cyan", "white"
        - "gray" (or "grey") and "none"
        - Bright colors: "bright_red", "bright-red", "BRIGHT RED", ...
        - Case insensitive, surrounding whitespace ignored

        Returns:
            The Color, or None if the name is not recognized
        """
        if not color_name:
            return None

        name = color_name.strip().lower().replace("-", "_").replace(" ", "_")
        if name == "grey":
            name = "gray"
        try:
            return Color[name.upper()]
        except KeyError:
            return None

    @staticmethod
    def to_name(color: ColorLike) -> str:
        """Get the persisted form of a color: its name, or the raw escape if custom."""
        return str(color)

    @staticmethod
    def parse(value: ColorLike | str | int) -> ColorLike:
        """
        Resolve a user supplied color value.

        Args:
            value: A Color, a CustomColor, a color name, a raw escape sequence
                   (anything starting with ESC "[") or an integer code 0-9

        Returns:
            The resolved color

        Raises:
            ValidationError: If the value is not a known color
        """
        if isinstance(value, (Color, CustomColor)):
            return value
        if isinstance(value, bool):
            raise ValidationError("Invalid color", value=value)
        if isinstance(value, int):
            if value in _COLOR_INDEX:
                return _COLOR_INDEX[value]
            raise ValidationError("Invalid color code, expected 0-9", value=value)
        if isinstance(value, str):
            if value.startswith(LogConstants.ESCAPE_PREFIX):
                return CustomColor(value)
            color = ColorCodec.from_name(value)
            if color is not None:
                return color
        raise ValidationError("Unknown color", value=repr(value))


def color_text(text: str, color: ColorLike) -> str:
    """Color text (module level shortcut for ColorCodec.wrap)."""
    return ColorCodec.wrap(text, color)
