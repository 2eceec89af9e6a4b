"""Default appearance and behaviour settings for the menu."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Scheme(enum.Enum):
    """Colour schemes used when drawing."""

    NORM = "norm"
    SEL = "sel"
    OUT = "out"


_PARTS = ("fg", "bg")


def _default_colors() -> dict[Scheme, tuple[str, str]]:
    return {
        Scheme.NORM: ("#ebdbb2", "#282828"),
        Scheme.SEL: ("#282828", "#d79921"),
        Scheme.OUT: ("#282828", "#98971a"),
    }


def _default_fonts() -> list[str]:
    return ["Hack:pixelsize=12:antialias=true:autohint=true"]


@dataclass
class Config:
    """Settings that command-line options may override."""

    topbar: bool = True
    centered: bool = False
    min_width: int = 500
    fonts: list[str] = field(default_factory=_default_fonts)
    prompt: str | None = None
    colors: dict[Scheme, tuple[str, str]] = field(default_factory=_default_colors)
    lines: int = 0
    lineheight: int = 21
    min_lineheight: int = 8
    word_delimiters: str = " "

    @staticmethod
    def _index(part: str) -> int:
        try:
            return _PARTS.index(part)
        except ValueError:
            raise ValueError(f"unknown colour part: {part!r}") from None

    def color(self, scheme: Scheme, part: str) -> str:
        """Return the ``"fg"`` or ``"bg"`` colour of ``scheme``."""
        return self.colors[scheme][self._index(part)]

    def set_color(self, scheme: Scheme, part: str, value: str) -> None:
        """Replace the ``"fg"`` or ``"bg"`` colour of ``scheme``."""
        pair = list(self.colors[scheme])
        pair[self._index(part)] = value
        self.colors[scheme] = (pair[0], pair[1])