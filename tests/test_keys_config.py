from __future__ import annotations

import pytest

from modal_engine.buffer import CaretShape
from modal_engine.config import MAX_COUNT, MODE_CONFIGS, EngineSettings, ModeConfig, ModeName
from modal_engine.keys import CTRL, ESCAPE, PAGE_DOWN, KeyInput, is_cancel


def test_key_input_normalizes_names_and_modifiers() -> None:
    key = KeyInput("ESC", modifiers=("Control", "ctrl", " "))

    assert key.key == ESCAPE
    assert key.modifiers == (CTRL,)
    assert KeyInput("Page_Down").key == PAGE_DOWN


def test_key_input_char_prefers_text() -> None:
    assert KeyInput("j").char == "j"
    assert KeyInput("Y").char == "Y"
    assert KeyInput("space", text=" ").char == " "
    assert KeyInput("left").char is None


def test_key_input_rejects_empty_key() -> None:
    with pytest.raises(ValueError):
        KeyInput("")


def test_cancel_keys() -> None:
    assert is_cancel(KeyInput("escape"))
    assert is_cancel(KeyInput("c", ("ctrl",)))
    assert not is_cancel(KeyInput("escape", ("shift",)))
    assert not is_cancel(KeyInput("c"))
    assert not is_cancel(KeyInput("c", ("ctrl", "alt")))


def test_mode_configs_cover_every_mode() -> None:
    assert set(MODE_CONFIGS) == set(ModeName)
    assert MODE_CONFIGS[ModeName.INSERT].caret_shape is CaretShape.INSERT
    assert MODE_CONFIGS[ModeName.NORMAL].caret_shape is CaretShape.BLOCK
    assert MODE_CONFIGS[ModeName.VISUAL] == ModeConfig("V-LINE", CaretShape.BLOCK)


def test_settings_from_env_overrides() -> None:
    settings = EngineSettings.from_env(
        {
            "MODAL_ENGINE_INITIAL_MODE": "Insert",
            "MODAL_ENGINE_PAGE_LINES": "5",
            "MODAL_ENGINE_MAX_COUNT": "99",
        }
    )

    assert settings.initial_mode is ModeName.INSERT
    assert settings.page_lines == 5
    assert settings.max_count == 99


def test_settings_from_env_falls_back_on_bad_values() -> None:
    settings = EngineSettings.from_env(
        {
            "MODAL_ENGINE_INITIAL_MODE": "replace",
            "MODAL_ENGINE_PAGE_LINES": "many",
            "MODAL_ENGINE_MAX_COUNT": "-3",
        }
    )

    assert settings == EngineSettings()
    assert settings.max_count == MAX_COUNT
