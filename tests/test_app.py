from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

APP_PATH = Path(__file__).resolve().parents[1] / "app.py"


@pytest.fixture
def app(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> AppTest:
    # keep writes out of the project data dir and off the network
    monkeypatch.setenv("PRESETS_PATH", str(tmp_path / "presets.json"))
    monkeypatch.setenv("DISABLE_GIST", "1")
    import services.presets as presets

    monkeypatch.setattr(presets, "_store", None)
    at = AppTest.from_file(str(APP_PATH), default_timeout=30)
    at.run()
    return at


def test_app_renders_default_form(app: AppTest) -> None:
    assert not app.exception
    assert len(app.session_state["trip"].legs) == 1


def test_add_leg_button_adds_row(app: AppTest) -> None:
    app.button(key="leg_add_0").click().run()

    assert not app.exception
    assert len(app.session_state["trip"].legs) == 2


def test_editing_deadhead_updates_trip(app: AppTest) -> None:
    app.number_input(key="deadhead_0").set_value(50.0).run()

    assert not app.exception
    assert app.session_state["trip"].deadhead_km == 50.0
