from __future__ import annotations
from loguru import logger
from .git import FlagChars, StatusProvider, parse_status
from .info import SessionInfo
from .paths import TRUNCATION_MARKER, abbreviate_parts
from .styles import Painter
from .styles import StyleClass as SC

#: The prompt symbol that ends the left prompt, including the trailing space
PROMPT_SYMBOL = "> "


def left(
    provider: StatusProvider,
    paint: Painter,
    chars: FlagChars = FlagChars(),
    git: bool = True,
) -> str:
    """
    Construct the left prompt: the Git flags (if inside a repository and
    ``git`` is true) followed by the prompt symbol.  Raises `GitError` if the
    repository's status cannot be obtained.
    """
    s = ""
    if git and provider.is_repo():
        status = parse_status(provider.status_report())
        logger.debug("Repository status: {}", status)
        s += status.display(paint, chars)
    s += paint(PROMPT_SYMBOL, SC.PROMPT)
    return s


def right(session: SessionInfo, paint: Painter) -> str:
    """Construct the right prompt: ``user@host`` for SSH sessions, else nothing"""
    return session.display(paint)


def tmux_right(path: str, home: str, width: int, paint: Painter) -> str:
    """
    Construct the tmux status segment for ``path``: the same text as
    `abbreviate()` with the truncation marker and the path painted separately
    """
    short, truncated = abbreviate_parts(path, home, width)
    s = paint(short, SC.PATH)
    if truncated:
        s = paint(TRUNCATION_MARKER, SC.TRUNCATED) + s
    return s
