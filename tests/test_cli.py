"""Tests for the command-line driver."""

from __future__ import annotations

import json
import logging
import os
import subprocess
import sys
from pathlib import Path

import pytest

from lemo.cli import EXIT_FAILURE, EXIT_OK, main

SRC_DIR = Path(__file__).resolve().parent.parent / "src"


def _run(args: list[str], *, cwd: Path) -> subprocess.CompletedProcess[str]:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC_DIR), env.get("PYTHONPATH")]))
    return subprocess.run(
        [sys.executable, "-m", "lemo", *args],
        cwd=cwd,
        env=env,
        text=True,
        capture_output=True,
        check=False,
    )


@pytest.fixture
def program(tmp_path: Path) -> Path:
    path = tmp_path / "prog.lemo"
    path.write_text("push 3\npush 4\nadd\ndump\n", encoding="utf-8")
    return path


class TestMain:
    """In-process calls to main()."""

    def test_success(self, program: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(program)]) == EXIT_OK
        captured = capsys.readouterr()
        assert captured.out == "7\n"
        assert captured.err == ""

    def test_missing_argument_exits_nonzero(self, capsys: pytest.CaptureFixture[str]) -> None:
        with pytest.raises(SystemExit) as exc:
            main([])
        assert exc.value.code == 2
        assert "usage: lemo" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main([str(tmp_path / "nope.lemo")]) == EXIT_FAILURE
        err = capsys.readouterr().err
        assert err.startswith("lemo: error: cannot read")

    def test_invalid_token(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "bad.lemo"
        path.write_text("push 1\nfrobnicate\n", encoding="utf-8")
        assert main([str(path)]) == EXIT_FAILURE
        err = capsys.readouterr().err
        assert f"{path}:2:1 invalid token 'frobnicate'" in err

    def test_runtime_error_keeps_earlier_output(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        path = tmp_path / "under.lemo"
        path.write_text("push 5 dump dump\n", encoding="utf-8")
        assert main([str(path)]) == EXIT_FAILURE
        captured = capsys.readouterr()
        assert captured.out == "5\n"
        assert "dump needs 1 stack value(s), found 0" in captured.err

    def test_stack_capacity_flag(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "deep.lemo"
        path.write_text("push 1 push 2 push 3\n", encoding="utf-8")
        assert main(["--stack-capacity", "2", str(path)]) == EXIT_FAILURE
        assert "stack overflow" in capsys.readouterr().err

    @pytest.mark.parametrize("value", ["0", "-3", "many"])
    def test_stack_capacity_must_be_positive(self, program: Path, value: str) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["--stack-capacity", value, str(program)])
        assert exc.value.code == 2

    def test_tokens_flag(self, program: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--tokens", str(program)]) == EXIT_OK
        tokens = json.loads(capsys.readouterr().out)
        assert [t.get("op", t.get("value")) for t in tokens] == ["push", 3, "push", 4, "add", "dump"]

    def test_verbose_logs_to_stderr(self, program: Path, capsys: pytest.CaptureFixture[str]) -> None:
        try:
            assert main(["-v", str(program)]) == EXIT_OK
            captured = capsys.readouterr()
            assert captured.out == "7\n"
            assert "Lexed 6 token(s)" in captured.err
        finally:
            logging.getLogger("lemo").setLevel(logging.NOTSET)
            for handler in list(logging.getLogger("lemo").handlers):
                logging.getLogger("lemo").removeHandler(handler)


class TestSubprocess:
    """python -m lemo end to end."""

    def test_run(self, program: Path, tmp_path: Path) -> None:
        proc = _run([str(program)], cwd=tmp_path)
        assert proc.returncode == 0, proc.stderr
        assert proc.stdout.splitlines() == ["7"]

    def test_no_arguments(self, tmp_path: Path) -> None:
        proc = _run([], cwd=tmp_path)
        assert proc.returncode == 2
        assert "usage:" in proc.stderr

    def test_failure_status(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.lemo"
        path.write_text("dump\n", encoding="utf-8")
        proc = _run([str(path)], cwd=tmp_path)
        assert proc.returncode == 1
        assert "lemo: error:" in proc.stderr
