"""Tests for the console entry point."""

import pytest

import iconpack_cli.__main__ as entry
from iconpack_cli.exceptions import OperationInProgressError


def _raising(exc):
    def _app():
        raise exc

    return _app


@pytest.mark.parametrize(
    "exc, code",
    [
        (OperationInProgressError("An icon operation is already running."), 1),
        (RuntimeError("boom"), 1),
        (KeyboardInterrupt(), 130),
    ],
)
def test_errors_become_exit_codes(monkeypatch, capsys, exc, code):
    monkeypatch.setattr(entry, "app", _raising(exc))
    with pytest.raises(SystemExit) as excinfo:
        entry.main()
    assert excinfo.value.code == code


def test_domain_errors_show_suggestions(monkeypatch, capsys):
    monkeypatch.setattr(
        entry, "app", _raising(OperationInProgressError("already running"))
    )
    with pytest.raises(SystemExit):
        entry.main()
    err = capsys.readouterr().err
    assert "OperationInProgressError" in err
    assert "Wait for the running operation" in err
