from __future__ import annotations

import pytest

from common import settings
from engine.line import defaults as line_defaults
from engine.line.colors import WHITE
from engine.line.distribution import ColorDistribution, WidthDistribution


@pytest.fixture()
def no_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(line_defaults, "load_config", lambda: {})


def test_builtin_defaults(no_config: None) -> None:
    d = line_defaults.reload_line_defaults()
    assert d.color == WHITE
    assert (d.width_upper, d.width_lower) == (1.0, 1.0)
    assert d.width_distribution is WidthDistribution.START
    assert d.color_distribution is ColorDistribution.START


def test_config_section_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    cfg = {
        "line": {
            "default_color": "#000000",
            "default_width_upper": 2,
            "width_distribution": "repeat",
            "color_distribution": 2,
        }
    }
    monkeypatch.setattr(line_defaults, "load_config", lambda: cfg)
    d = line_defaults.reload_line_defaults()
    assert d.color == (0.0, 0.0, 0.0)
    assert d.width_upper == 2.0
    assert d.width_lower == 1.0
    assert d.width_distribution is WidthDistribution.REPEAT
    assert d.color_distribution is ColorDistribution.EVEN


def test_invalid_config_values_are_ignored(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    cfg = {"line": {"default_color": "nope", "width_distribution": "zigzag"}}
    monkeypatch.setattr(line_defaults, "load_config", lambda: cfg)
    d = line_defaults.reload_line_defaults()
    assert d.color == WHITE
    assert d.width_distribution is WidthDistribution.START
    assert "default_color" in caplog.text


def test_env_overrides_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        line_defaults, "load_config", lambda: {"line": {"default_width_upper": 2.0}}
    )
    monkeypatch.setenv("PXD_LINE_DEFAULT_WIDTH_UPPER", "5")
    monkeypatch.setenv("PXD_LINE_DEFAULT_COLOR", "#00ff00")
    settings.reload_from_env()
    try:
        d = line_defaults.reload_line_defaults()
        assert d.width_upper == 5.0
        assert d.color == (0.0, 1.0, 0.0)
    finally:
        monkeypatch.delenv("PXD_LINE_DEFAULT_WIDTH_UPPER")
        monkeypatch.delenv("PXD_LINE_DEFAULT_COLOR")
        settings.reload_from_env()


def test_result_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[int] = []

    def _load() -> dict:
        calls.append(1)
        return {}

    monkeypatch.setattr(line_defaults, "load_config", _load)
    a = line_defaults.get_line_defaults()
    b = line_defaults.get_line_defaults()
    assert a is b
    assert len(calls) == 1
