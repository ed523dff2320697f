import pytest
from debug_output import debug_print, resolve_verbose


@pytest.mark.parametrize("value, expected", [
    ("1", True), ("true", True), ("YES", True), (" on ", True),
    ("0", False), ("false", False), ("", False),
])
def test_resolve_verbose_from_environment(monkeypatch, value, expected):
    monkeypatch.setenv('LUDWIEG_VERBOSE', value)
    assert resolve_verbose() is expected


def test_explicit_verbose_wins(monkeypatch):
    monkeypatch.setenv('LUDWIEG_VERBOSE', '0')
    assert resolve_verbose(True) is True


def test_debug_print_only_when_verbose(capsys):
    debug_print("hidden", False)
    debug_print("shown", True)
    captured = capsys.readouterr()
    assert captured.err == "[DEBUG] shown\n"
    assert captured.out == ""
