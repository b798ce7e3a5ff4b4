import sys

import pytest

from unit_panel.errors import SpawnFailure
from unit_panel.invoker import ProcessInvoker


def test_captures_stdout_and_success():
    res = ProcessInvoker().run(sys.executable, ["-c", "print('hello')"])
    assert res.exit_success
    assert res.returncode == 0
    assert res.stdout.strip() == b"hello"
    assert res.stderr == b""


def test_nonzero_exit_is_not_an_error():
    code = "import sys; sys.stderr.write('Unit not found.\\n'); sys.exit(5)"
    res = ProcessInvoker().run(sys.executable, ["-c", code])
    assert not res.exit_success
    assert res.returncode == 5
    assert res.stderr_text() == "Unit not found."


def test_arguments_are_not_shell_interpreted():
    res = ProcessInvoker().run(sys.executable, ["-c", "import sys; print(sys.argv[1])", "$(echo hi); rm -rf /"])
    assert res.stdout.decode().strip() == "$(echo hi); rm -rf /"


def test_missing_binary_raises_spawn_failure():
    with pytest.raises(SpawnFailure) as exc:
        ProcessInvoker().run("/nonexistent/definitely-not-systemctl", ["list-units"])
    assert "definitely-not-systemctl" in str(exc.value)
