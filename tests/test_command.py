from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest
from rich.console import Console

from kickoff.command import CommandSpec, ExecutionError, PreflightError, check_installed, run_command


@pytest.fixture
def quiet_console() -> Console:
    return Console(file=io.StringIO())


def _python(code: str, **kwargs) -> CommandSpec:
    return CommandSpec(description="Running python", name=sys.executable, args=("-c", code), **kwargs)


def test_successful_command_returns_none(quiet_console: Console) -> None:
    assert run_command(_python("print('hello')"), console=quiet_console) is None


def test_non_zero_exit_raises_generic_message(quiet_console: Console) -> None:
    spec = CommandSpec(description="Failing", name=sys.executable, args=("-c", "import sys; sys.exit(3)"))
    with pytest.raises(ExecutionError) as excinfo:
        run_command(spec, console=quiet_console)
    assert str(excinfo.value) == f"{sys.executable} failed"
    assert excinfo.value.returncode == 3
    assert excinfo.value.spec is spec


def test_non_zero_exit_uses_fail_message_and_keeps_output(quiet_console: Console) -> None:
    spec = _python("print('boom'); raise SystemExit(1)", fail_message="install broke")
    with pytest.raises(ExecutionError, match="install broke") as excinfo:
        run_command(spec, console=quiet_console)
    assert "boom" in excinfo.value.output


def test_missing_executable_raises_execution_error(quiet_console: Console) -> None:
    spec = CommandSpec(description="Nope", name="kickoff-no-such-binary-xyz", args=("--version",))
    with pytest.raises(ExecutionError, match="kickoff-no-such-binary-xyz failed") as excinfo:
        run_command(spec, console=quiet_console)
    assert excinfo.value.returncode is None
    assert isinstance(excinfo.value.__cause__, OSError)


def test_cwd_is_honoured(tmp_path: Path, quiet_console: Console) -> None:
    run_command(_python("open('marker.txt', 'w').write('x')", cwd=tmp_path), console=quiet_console)
    assert (tmp_path / "marker.txt").read_text() == "x"


def test_verbose_run_streams_instead_of_capturing(quiet_console: Console, capfd: pytest.CaptureFixture[str]) -> None:
    run_command(_python("print('live output')", verbose=True), console=quiet_console)
    assert "live output" in capfd.readouterr().out


def test_command_spec_argv() -> None:
    spec = CommandSpec(description="d", name="git", args=("commit", "-m", "msg"))
    assert spec.argv == ["git", "commit", "-m", "msg"]


def test_check_installed_runs_version(fake_runner) -> None:
    check_installed("git", "https://example.invalid/git", runner=fake_runner)
    assert fake_runner.argvs == [["git", "--version"]]
    assert fake_runner.calls[0].description == "Checking if git is installed"


def test_check_installed_uses_command_override(fake_runner) -> None:
    check_installed("node", "https://example.invalid/node", command="nodejs", runner=fake_runner)
    assert fake_runner.argvs == [["nodejs", "--version"]]


def test_check_installed_failure_is_preflight_error(fake_runner) -> None:
    fake_runner.fail_on = [["npm", "--version"]]
    with pytest.raises(PreflightError) as excinfo:
        check_installed("npm", "https://example.invalid/npm", runner=fake_runner)
    assert excinfo.value.name == "npm"
    assert excinfo.value.link == "https://example.invalid/npm"
    assert "npm is required to run this generator" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ExecutionError)
