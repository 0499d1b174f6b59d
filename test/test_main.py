from __future__ import annotations
import getpass
from io import StringIO
from pathlib import Path
import socket
import sys
import pytest
from promptseg import __version__
from promptseg import __main__ as cli
from promptseg.__main__ import build_parser, main
from promptseg.errors import GitError


class FakeGit:
    report = "# branch.head feature-x\n# branch.ab +2 -0\n? new.txt\n"

    def is_repo(self) -> bool:
        return True

    def status_report(self) -> str:
        return self.report


class BrokenGit(FakeGit):
    def status_report(self) -> str:
        raise GitError("git status failed: fatal: bad index file")


def test_default_mode_is_left(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli, "GitCLI", FakeGit)
    main([])
    assert capsys.readouterr().out == "gcda> "


def test_left_no_git(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli, "GitCLI", FakeGit)
    main(["left", "--no-git"])
    assert capsys.readouterr().out == "> "


def test_left_git_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli, "GitCLI", BrokenGit)
    with pytest.raises(SystemExit) as excinfo:
        main(["left"])
    assert excinfo.value.code == 1
    out, err = capsys.readouterr()
    assert out == ""
    assert err == "Prompt err (left): git status failed: fatal: bad index file\n"


def test_right_local(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("SSH_CONNECTION", raising=False)
    main(["right"])
    assert capsys.readouterr().out == ""


def test_right_remote(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("SSH_CONNECTION", "10.0.0.2 52514 10.0.0.1 22")
    monkeypatch.setattr(getpass, "getuser", lambda: "alice")
    monkeypatch.setattr(socket, "gethostname", lambda: "firefly")
    main(["right"])
    assert capsys.readouterr().out == "alice@firefly"


def test_right_user_lookup_fails(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def nouser() -> str:
        raise OSError("No username set in the environment")

    monkeypatch.setenv("SSH_CONNECTION", "10.0.0.2 52514 10.0.0.1 22")
    monkeypatch.setattr(getpass, "getuser", nouser)
    with pytest.raises(SystemExit) as excinfo:
        main(["right"])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith("Prompt err (right): could not determine current user")


@pytest.mark.parametrize(
    "args,stdin,output",
    [
        ([], "/home/alice/projects/widget\n", "~/projects/widget"),
        (["--width", "10"], "/home/alice/projects/widget/src/lib", "+p/w/s/lib"),
        (["--width", "13"], "/home/alice/projects/widget/src/lib\n", "~/p/w/src/lib"),
    ],
)
def test_tmux_right(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    args: list[str],
    stdin: str,
    output: str,
) -> None:
    monkeypatch.setenv("HOME", "/home/alice")
    monkeypatch.setattr(sys, "stdin", StringIO(stdin))
    main(["tmux-right", *args])
    assert capsys.readouterr().out == output


def test_tmux_right_empty_stdin_uses_cwd(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("HOME", "/home/alice")
    monkeypatch.setenv("PWD", "/home/alice/src")
    monkeypatch.setattr(sys, "stdin", StringIO(""))
    main(["tmux-right"])
    assert capsys.readouterr().out == "~/src"


def test_tmux_right_styled(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("HOME", "/home/alice")
    monkeypatch.setattr(sys, "stdin", StringIO("/home/alice/work\n"))
    main(["--tmux", "-T", "light", "tmux-right"])
    assert capsys.readouterr().out == "#[fg=colour4]~/work#[default]"


@pytest.mark.parametrize("width", ["0", "-3", "wide"])
def test_tmux_right_bad_width(width: str) -> None:
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["tmux-right", "--width", width])
    assert excinfo.value.code == 2


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.mode == "left"
    assert not args.no_git
    assert args.width == 40
    assert args.styler is None
    assert args.theme == "dark"


@pytest.mark.parametrize(
    "value,level",
    [
        ("debug", "DEBUG"),
        (" Error ", "ERROR"),
        ("verbose", "WARNING"),
        ("", "WARNING"),
    ],
)
def test_log_level_from_environment(
    monkeypatch: pytest.MonkeyPatch, value: str, level: str
) -> None:
    monkeypatch.setenv("PROMPTSEG_LOG_LEVEL", value)
    assert build_parser().parse_args([]).log_level == level


def test_right_invalid_log_level_env(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("PROMPTSEG_LOG_LEVEL", "verbose")
    monkeypatch.delenv("SSH_CONNECTION", raising=False)
    main(["right"])
    assert capsys.readouterr() == ("", "")


def test_version(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out == f"promptseg {__version__}\n"


def test_tmux_right_home_lookup_fails(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    def nohome() -> Path:
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(Path, "home", nohome)
    monkeypatch.setattr(sys, "stdin", StringIO("/srv/www\n"))
    with pytest.raises(SystemExit) as excinfo:
        main(["tmux-right"])
    assert excinfo.value.code == 1
    err = capsys.readouterr().err
    assert err.startswith(
        "Prompt err (tmux-right): could not determine home directory"
    )
