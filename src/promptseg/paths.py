from __future__ import annotations

#: Replaces the home directory at the start of a path
HOME_MARKER = "~"

#: Prepended to a path whose leading components have been dropped
TRUNCATION_MARKER = "+"

#: Default maximum display width of the ``tmux-right`` path
DEFAULT_WIDTH = 40

SEP = "/"


def collapse_home(path: str, home: str) -> str:
    """
    If ``path`` is ``home`` or is beneath it, replace that prefix with ``~``.
    Only whole path components are matched, so ``/home/bobby`` is not
    considered to be under ``/home/bob``.
    """
    home = home.rstrip(SEP)
    if not home:
        return path
    if path == home or path.startswith(home + SEP):
        return HOME_MARKER + path[len(home) :]
    return path


def abbreviate(path: str, home: str, width: int | None = None) -> str:
    """
    Collapse the home directory in ``path`` to ``~``; then, if ``width`` is
    not `None`, shorten the result to fit in ``width`` characters as described
    under `shorten()`.
    """
    short, truncated = abbreviate_parts(path, home, width)
    return TRUNCATION_MARKER + short if truncated else short


def abbreviate_parts(
    path: str, home: str, width: int | None = None
) -> tuple[str, bool]:
    """
    Like `abbreviate()`, but return the shortened path without the truncation
    marker, along with whether the marker is needed, so that callers can style
    the two separately
    """
    path = collapse_home(path, home)
    if width is None:
        return (path, False)
    return shorten(path, width)


def shorten(path: str, width: int) -> tuple[str, bool]:
    """
    Shorten ``path`` to fit in ``width`` characters.

    First, each component other than the last (and other than ``~`` and empty
    components) is cut down to its first character, one at a time from the
    left, until the path fits.  If it still does not fit, leading components
    are dropped: components are accumulated from the right for as long as the
    result stays strictly shorter than ``width``, leaving room for the
    truncation marker.

    Returns the shortened path and whether any components were dropped.  The
    final component is always kept, even if it alone exceeds ``width``.
    """
    if len(path) <= width:
        return (path, False)
    parts = path.split(SEP)
    for i in range(len(parts) - 1):
        if parts[i] != HOME_MARKER and len(parts[i]) > 1:
            parts[i] = parts[i][0]
        joined = SEP.join(parts)
        if len(joined) <= width:
            return (joined, False)
    short = parts[-1]
    for p in reversed(parts[:-1]):
        candidate = p + SEP + short
        if len(candidate) < width:
            short = candidate
        else:
            break
    return (short, True)
