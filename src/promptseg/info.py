from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
import getpass
import os
from pathlib import Path
import socket
from loguru import logger
from .errors import PromptError
from .styles import Painter
from .styles import StyleClass as SC


@dataclass
class SessionInfo:
    #: `True` iff we are running inside an SSH session
    remote: bool

    #: The login name of the current user; only looked up for remote sessions
    user: str | None = None

    #: The local hostname; only looked up for remote sessions
    hostname: str | None = None

    @classmethod
    def get(cls, environ: Mapping[str, str] | None = None) -> SessionInfo:
        """
        Inspect the environment (defaulting to `os.environ`) and the system to
        determine the current session's details.  Raises `PromptError` if the
        user or hostname cannot be determined.
        """
        if environ is None:
            environ = os.environ
        remote = bool(environ.get("SSH_CONNECTION"))
        logger.debug("Remote session: {}", remote)
        if not remote:
            return cls(remote=False)
        try:
            user = getpass.getuser()
        except (KeyError, OSError) as e:
            raise PromptError(f"could not determine current user: {e}") from e
        try:
            hostname = socket.gethostname()
        except OSError as e:
            raise PromptError(f"could not determine hostname: {e}") from e
        return cls(remote=True, user=user, hostname=hostname)

    def display(self, paint: Painter) -> str:
        if not self.remote:
            return ""
        return (
            paint(self.user or "", SC.USER) + "@" + paint(self.hostname or "", SC.HOST)
        )


def home_dir() -> str:
    """
    Return the current user's home directory.  Raises `PromptError` if it
    cannot be determined.
    """
    try:
        return str(Path.home())
    except (KeyError, RuntimeError) as e:
        raise PromptError(f"could not determine home directory: {e}") from e


def getcwd() -> str:
    """Return the path to the current working directory"""
    # Prefer $PWD to os.getcwd() as the former does not resolve symlinks
    if pwd := os.environ.get("PWD"):
        return pwd
    try:
        return os.getcwd()
    except OSError as e:
        raise PromptError(f"could not determine working directory: {e}") from e
