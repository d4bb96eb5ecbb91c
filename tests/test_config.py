import logging
import pathlib
import sys

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from goal_tracker.config import GoalTrackerSettings, build_adapter, build_storage, load_settings  # noqa: E402
from goal_tracker.persistence.storage import InMemoryStorage, JsonFileStorage  # noqa: E402


def test_defaults_without_file_or_environment():
    settings = load_settings(environ={})
    assert settings == GoalTrackerSettings()
    assert settings.storage_key == "goal_tracker_v2"
    assert settings.storage_path is None


def test_yaml_file_then_environment(tmp_path):
    config_file = tmp_path / "tracker.yaml"
    config_file.write_text("storage_key: my_goals\nlog_level: DEBUG\n", encoding="utf-8")
    settings = load_settings(config_file, environ={"GOAL_TRACKER_LOG_LEVEL": "WARNING"})
    assert settings.storage_key == "my_goals"
    assert settings.log_level == "WARNING"


def test_environment_storage_path(tmp_path):
    settings = load_settings(environ={"GOAL_TRACKER_STORAGE_PATH": str(tmp_path / "goals.json")})
    assert settings.storage_path == tmp_path / "goals.json"
    assert isinstance(build_storage(settings), JsonFileStorage)


def test_broken_yaml_falls_back_to_defaults(tmp_path, caplog):
    config_file = tmp_path / "tracker.yaml"
    config_file.write_text("storage_key: [unclosed\n", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        settings = load_settings(config_file, environ={})
    assert settings == GoalTrackerSettings()
    assert "Could not read settings" in caplog.text


def test_invalid_values_fall_back_to_defaults(tmp_path):
    config_file = tmp_path / "tracker.yaml"
    config_file.write_text("log_level: [1, 2]\n", encoding="utf-8")
    assert load_settings(config_file, environ={}) == GoalTrackerSettings()


def test_build_adapter_uses_storage_key():
    adapter = build_adapter(GoalTrackerSettings(storage_key="custom"))
    assert isinstance(adapter.storage, InMemoryStorage)
    assert adapter.keys == ["custom", "custom_view", "custom_labs", "custom_theme"]


def test_create_session_wires_file_storage(tmp_path):
    from goal_tracker.main import create_session

    config_file = tmp_path / "tracker.yaml"
    config_file.write_text(f"storage_path: {tmp_path / 'goals.json'}\nstorage_key: mine\n", encoding="utf-8")
    session = create_session(config_file)
    session.add_goal("Stretch", "checklist", 2)

    reopened = create_session(config_file)
    assert [goal.title for goal in reopened.state.goals] == ["Stretch"]
    assert reopened.adapter.goals_key == "mine"
