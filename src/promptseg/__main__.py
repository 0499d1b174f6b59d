from __future__ import annotations
import argparse
import os
import sys
from loguru import logger
from . import __version__
from .errors import PromptError
from .git import GitCLI
from .info import SessionInfo, getcwd, home_dir
from .paths import DEFAULT_WIDTH
from .prompts import left, right, tmux_right
from .styles import STYLERS, THEMES, Painter

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def default_log_level() -> str:
    """
    Return the log level named by :envvar:`PROMPTSEG_LOG_LEVEL`, or
    ``WARNING`` if it is unset or not a known level
    """
    level = os.environ.get("PROMPTSEG_LOG_LEVEL", "").strip().upper()
    return level if level in LOG_LEVELS else "WARNING"


def positive_int(s: str) -> int:
    try:
        n = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {s!r}")
    if n < 1:
        raise argparse.ArgumentTypeError(f"width must be positive: {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promptseg",
        description="Print a segment of a shell or tmux prompt",
    )
    for name, desc in [
        ("plain", "Output unstyled text (default)"),
        ("ansi", "Style output for direct display"),
        ("bash", "Style output for Bash's PS1"),
        ("zsh", "Style output for zsh's PS1"),
        ("tmux", "Style output for a tmux status line"),
    ]:
        parser.add_argument(
            f"--{name}",
            action="store_const",
            dest="styler",
            const=name,
            help=desc,
        )
    parser.add_argument(
        "-T",
        "--theme",
        choices=list(THEMES.keys()),
        default="dark",
        help="Select the color theme to use when styling  [default: dark]",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=default_log_level(),
        help="Set the level of diagnostics written to stderr  [default: WARNING]",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    sub = parser.add_subparsers(title="segments", dest="mode", metavar="SEGMENT")
    lp = sub.add_parser("left", help="Print the Git flags and prompt symbol (default)")
    lp.add_argument(
        "--no-git",
        action="store_true",
        help="Do not inspect the current Git repository",
    )
    sub.add_parser("right", help="Print user@host when in an SSH session")
    tp = sub.add_parser(
        "tmux-right", help="Print the path read from stdin, shortened to fit"
    )
    tp.add_argument(
        "--width",
        type=positive_int,
        default=DEFAULT_WIDTH,
        metavar="N",
        help=f"Maximum width of the path  [default: {DEFAULT_WIDTH}]",
    )
    parser.set_defaults(mode="left", no_git=False, width=DEFAULT_WIDTH)
    return parser


def setup_logging(log_level: str) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format="{time:HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
    )


def render(args: argparse.Namespace) -> str:
    paint = Painter(STYLERS[args.styler or "plain"](), THEMES[args.theme])
    if args.mode == "right":
        return right(SessionInfo.get(), paint)
    elif args.mode == "tmux-right":
        path = sys.stdin.read().rstrip("\r\n")
        if not path:
            path = getcwd()
        return tmux_right(path, home_dir(), args.width, paint)
    else:
        return left(GitCLI(), paint, git=not args.no_git)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    try:
        s = render(args)
    except PromptError as e:
        logger.debug("Rendering {} prompt failed: {!r}", args.mode, e)
        print(f"Prompt err ({args.mode}): {e}", file=sys.stderr)
        sys.exit(1)
    sys.stdout.write(s)
    sys.stdout.flush()


if __name__ == "__main__":
    main()
