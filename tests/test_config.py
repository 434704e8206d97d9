import pytest

from undo_history.runtime import config


def test_history_capacity_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("UNDO_HISTORY_CAPACITY", raising=False)

    assert config.history_capacity() == config.DEFAULT_CAPACITY


def test_history_capacity_accepts_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UNDO_HISTORY_CAPACITY", "0")

    assert config.history_capacity() == 0


@pytest.mark.parametrize("raw", ["-3", "many"])
def test_history_capacity_rejects_bad_values(
    monkeypatch: pytest.MonkeyPatch, raw: str
) -> None:
    monkeypatch.setenv("UNDO_HISTORY_CAPACITY", raw)

    with pytest.raises(ValueError):
        config.history_capacity()


def test_env_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UNDO_HISTORY_NO_COLOR", "Yes")
    monkeypatch.delenv("UNDO_HISTORY_LOG_JSON", raising=False)

    assert config.env_flag("NO_COLOR", False) is True
    assert config.env_flag("LOG_JSON", True) is True
