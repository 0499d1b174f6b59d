from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
import re
import subprocess
from typing import Protocol
from loguru import logger
from .errors import GitError
from .styles import Painter
from .styles import StyleClass as SC

#: Leading arguments for every Git command run; prompts must never contend
#: with the user's own Git processes for the index lock
GIT_PREFIX = ("git", "--no-optional-locks")

#: First tokens of the per-file records in ``git status --porcelain=v2``
#: output: ignored, untracked, ordinary change, rename/copy, unmerged
FILE_RECORD_KINDS = frozenset({"!", "?", "1", "2", "u"})


@dataclass(frozen=True)
class FlagChars:
    """
    The characters used to build the Git portion of the left prompt.  Flags are
    emitted in the order the attributes are listed here.
    """

    #: Shown whenever the current directory is inside a work tree
    repo: str = "g"

    #: Shown when ``HEAD`` is not one of `default_branches`
    branch: str = "c"

    #: Shown when there are tracked changes or untracked files
    dirty: str = "d"

    #: Shown when upstream has commits not yet merged
    behind: str = "b"

    #: Shown when there are local commits not yet pushed
    ahead: str = "a"

    #: Shown when there is at least one stash entry
    stash: str = "s"

    default_branches: tuple[str, ...] = ("main", "master")


@dataclass(frozen=True)
class RepoStatus:
    #: The name of the current branch.  This is empty if the status report
    #: did not name one; a detached ``HEAD`` shows up as ``"(detached)"``.
    head: str = ""

    #: The number of commits by which ``HEAD`` is ahead of ``@{upstream}``
    ahead: int = 0

    #: The number of commits by which ``HEAD`` is behind ``@{upstream}``
    behind: int = 0

    #: `True` iff there are any changed, unmerged, untracked or ignored paths
    dirty: bool = False

    #: `True` iff there are any stashed changes
    stash: bool = False

    def flags(self, chars: FlagChars = FlagChars()) -> list[tuple[str, SC]]:
        """
        Return the flag characters to display for this status, in display
        order, each paired with the style class to paint it with
        """
        flags = [(chars.repo, SC.GIT_REPO)]
        if self.head not in chars.default_branches:
            flags.append((chars.branch, SC.GIT_BRANCH))
        if self.dirty:
            flags.append((chars.dirty, SC.GIT_DIRTY))
        if self.behind > 0:
            flags.append((chars.behind, SC.GIT_BEHIND))
        if self.ahead > 0:
            flags.append((chars.ahead, SC.GIT_AHEAD))
        if self.stash:
            flags.append((chars.stash, SC.GIT_STASH))
        return flags

    def display(self, paint: Painter, chars: FlagChars = FlagChars()) -> str:
        return "".join(paint(c, klass) for c, klass in self.flags(chars))


def parse_status(report: str) -> RepoStatus:
    """
    Summarize the output of ``git status --show-stash --branch
    --porcelain=v2`` as a `RepoStatus`.

    Only the ``branch.head``, ``branch.ab`` and ``stash`` header lines are
    examined, plus the first token of each per-file record.  Lines that are
    too short or otherwise malformed are skipped, so this never fails; fields
    whose lines are missing keep their default values.
    """
    head = ""
    ahead = 0
    behind = 0
    dirty = False
    stash = False
    for line in report.split("\n"):
        tokens = line.rstrip("\r").split(" ")
        if len(tokens) < 2:
            continue
        kind = tokens[0]
        if kind == "#":
            field = tokens[1]
            args = tokens[2:]
            if field == "branch.head" and args and args[0]:
                head = args[0]
            elif field == "branch.ab" and len(args) >= 2:
                if n := count_arg(args[0], "+"):
                    ahead = n
                if n := count_arg(args[1], "-"):
                    behind = n
            elif field == "stash" and args:
                if not re.fullmatch(r"[+-]?[0-9]+", args[0]):
                    logger.debug("Skipping malformed stash line: {!r}", line)
                    continue
                if int(args[0]) > 0:
                    stash = True
        elif kind in FILE_RECORD_KINDS:
            dirty = True
    return RepoStatus(
        head=head, ahead=ahead, behind=behind, dirty=dirty, stash=stash
    )


def count_arg(token: str, sign: str) -> int | None:
    """
    Parse a signed commit count from a ``branch.ab`` line (e.g., ``+2`` or
    ``-0``).  Returns `None` if ``token`` does not start with ``sign`` followed
    by one or more ASCII digits.
    """
    if token.startswith(sign) and re.fullmatch(r"[0-9]+", token[1:]):
        return int(token[1:])
    logger.debug("Skipping malformed ahead/behind count: {!r}", token)
    return None


class StatusProvider(Protocol):
    def is_repo(self) -> bool: ...

    def status_report(self) -> str: ...


@dataclass
class GitCLI:
    """Obtains repository status by running the ``git`` command"""

    #: Directory to run Git in; `None` means the current directory
    cwd: Path | None = None

    def is_repo(self) -> bool:
        """
        Return `True` iff the working directory is inside a Git work tree.  If
        Git is not installed or the command fails for any other reason, this is
        `False`.
        """
        cmd = [*GIT_PREFIX, "rev-parse", "--is-inside-work-tree"]
        logger.debug("Running: {}", " ".join(cmd))
        try:
            subprocess.run(
                cmd,
                cwd=self.cwd,
                check=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except FileNotFoundError:
            # Git is not installed
            logger.debug("git executable not found")
            return False
        except subprocess.CalledProcessError as e:
            logger.debug("git rev-parse exited with status {}", e.returncode)
            return False
        return True

    def status_report(self) -> str:
        """
        Run ``git status`` and return its porcelain v2 output.  Raises
        `GitError` if the command cannot be run or exits nonzero.
        """
        cmd = [
            *GIT_PREFIX,
            "status",
            "--show-stash",
            "--branch",
            "--porcelain=v2",
        ]
        logger.debug("Running: {}", " ".join(cmd))
        try:
            r = subprocess.run(
                cmd,
                cwd=self.cwd,
                check=True,
                text=True,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except subprocess.CalledProcessError as e:
            msg = (e.stderr or "").strip() or f"exited with status {e.returncode}"
            raise GitError(f"git status failed: {msg}") from e
        except OSError as e:
            raise GitError(f"could not run git: {e}") from e
        return r.stdout
