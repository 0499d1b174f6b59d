from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class Color(Enum):
    """
    An enumeration of the supported foreground colors.  Each color's value
    equals its xterm number.
    """

    RED = 1
    GREEN = 2
    YELLOW = 3
    BLUE = 4
    MAGENTA = 5
    CYAN = 6
    LIGHT_RED = 9
    LIGHT_GREEN = 10
    LIGHT_YELLOW = 11
    LIGHT_BLUE = 12
    LIGHT_MAGENTA = 13
    LIGHT_CYAN = 14

    def asfg(self) -> int:
        """
        Return the ANSI SGR parameter for setting the color as the foreground
        color
        """
        c = self.value
        return c + 30 if c < 8 else c + 82


@dataclass
class Style:
    color: Color | None = None
    bold: bool = False

    def as_params(self) -> list[str]:
        params = []
        if self.color is not None:
            params.append(str(self.color.asfg()))
        if self.bold:
            params.append("1")
        return params


class Styler(Protocol):
    def __call__(self, s: str, style: Style) -> str: ...


class PlainStyler:
    """Styler that outputs strings unchanged, ignoring all styles"""

    def __call__(self, s: str, style: Style) -> str:
        return s


class ANSIStyler:
    """Class for styling strings for display immediately in the terminal"""

    def __call__(self, s: str, style: Style) -> str:
        """
        Stylize the string ``s`` with ANSI escape sequences.  If
        ``style.color`` is non-`None`, the string will be stylized with the
        given foreground color.  If ``style.bold`` is true, the string will be
        stylized bold.

        :param str s: the string to stylize
        :param Style style: the color & weight to stylize the string with
        """
        if params := style.as_params():
            s = f"\x1B[{';'.join(params)}m{s}\x1B[m"
        return s


class BashStyler:
    """Class for escaping & styling strings for use in Bash's PS1 variable"""

    def __call__(self, s: str, style: Style) -> str:
        r"""
        Return the string ``s`` escaped for use in a PS1 variable, wrapped in
        ANSI escape sequences for ``style``.  All escape sequences are wrapped
        in ``\[ ... \]`` so that Bash does not count them towards the width of
        the prompt.
        """
        s = s.replace("\\", r"\\")
        if params := style.as_params():
            s = rf"\[\e[{';'.join(params)}m\]{s}\[\e[m\]"
        return s


class ZshStyler:
    """Class for escaping & styling strings for use in zsh's PS1 variable"""

    def __call__(self, s: str, style: Style) -> str:
        s = s.replace("%", "%%")
        if style.bold:
            s = f"%B{s}%b"
        if style.color is not None:
            s = f"%F{{{style.color.value}}}{s}%f"
        return s


class TmuxStyler:
    """Class for escaping & styling strings for a tmux ``status-right``"""

    def __call__(self, s: str, style: Style) -> str:
        s = s.replace("#", "##")
        attrs = []
        if style.color is not None:
            attrs.append(f"fg=colour{style.color.value}")
        if style.bold:
            attrs.append("bold")
        if attrs:
            s = f"#[{','.join(attrs)}]{s}#[default]"
        return s


STYLERS: dict[str, type[Styler]] = {
    "plain": PlainStyler,
    "ansi": ANSIStyler,
    "bash": BashStyler,
    "zsh": ZshStyler,
    "tmux": TmuxStyler,
}

StyleClass = Enum(
    "StyleClass",
    [
        "GIT_REPO",
        "GIT_BRANCH",
        "GIT_DIRTY",
        "GIT_BEHIND",
        "GIT_AHEAD",
        "GIT_STASH",
        "PROMPT",
        "USER",
        "HOST",
        "PATH",
        "TRUNCATED",
    ],
)

Theme = dict[StyleClass, Style]

DARK_THEME = {
    StyleClass.GIT_REPO: Style(Color.LIGHT_GREEN),
    StyleClass.GIT_BRANCH: Style(Color.LIGHT_BLUE),
    StyleClass.GIT_DIRTY: Style(Color.LIGHT_YELLOW, bold=True),
    StyleClass.GIT_BEHIND: Style(Color.RED),
    StyleClass.GIT_AHEAD: Style(Color.GREEN),
    StyleClass.GIT_STASH: Style(Color.MAGENTA),
    StyleClass.PROMPT: Style(bold=True),
    StyleClass.USER: Style(Color.LIGHT_RED),
    StyleClass.HOST: Style(Color.LIGHT_RED),
    StyleClass.PATH: Style(Color.LIGHT_CYAN),
    StyleClass.TRUNCATED: Style(Color.YELLOW),
}

LIGHT_THEME = DARK_THEME | {
    StyleClass.GIT_REPO: Style(Color.GREEN),
    StyleClass.GIT_BRANCH: Style(Color.BLUE),
    StyleClass.PATH: Style(Color.BLUE),
}

THEMES = {
    "dark": DARK_THEME,
    "light": LIGHT_THEME,
}


@dataclass
class Painter:
    styler: Styler
    theme: Theme

    def __call__(self, s: str, klass: StyleClass) -> str:
        return self.styler(s, self.theme[klass])


#: A `Painter` that leaves everything unstyled
PLAIN = Painter(PlainStyler(), DARK_THEME)
