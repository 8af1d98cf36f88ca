from __future__ import annotations

import pytest

from modal_engine.runtime import telemetry


def test_unknown_preset_is_rejected() -> None:
    with pytest.raises(ValueError):
        telemetry.build_config("chatty")


def test_configure_rejects_config_and_preset_together() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="quiet")


def test_presets_cover_known_profiles() -> None:
    assert set(telemetry.PRESETS) == {"development", "production", "quiet"}


def test_span_reraises_and_records_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    failures: list[str] = []
    monkeypatch.setattr(telemetry.SpanHandle, "fail", lambda self, reason: failures.append(reason))

    with pytest.raises(RuntimeError):
        with telemetry.span("tests::span", metadata={"key": "j"}):
            raise RuntimeError("boom")

    assert failures == ["boom"]
