from pathlib import Path

from fleetwatch.config import Settings


def test_load_from_yaml(tmp_path):
    config = tmp_path / "settings.yaml"
    config.write_text(
        "sheets:\n"
        "  default_date: '24 August'\n"
        "thresholds:\n"
        "  speed_alarm: 100\n"
        "storage:\n"
        "  backend: supabase\n"
        "  supabase_url: https://proj.supabase.co\n",
        encoding="utf-8",
    )
    cfg = Settings.load(config)
    assert cfg.sheets.default_date == "24 August"
    assert cfg.thresholds.speed_alarm == 100
    assert cfg.thresholds.speed_warning == 75
    assert cfg.storage.backend == "supabase"


def test_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = Settings.load()
    assert cfg.sheets.default_gid["speed"] == "293366971"
    assert cfg.thresholds.offline_min_hours == 24
    assert cfg.storage.author_tag == "Admin"
    assert isinstance(cfg.storage.db_path, Path)


def test_environment_overrides_yaml(tmp_path, monkeypatch):
    config = tmp_path / "settings.yaml"
    config.write_text(
        "sheets:\n"
        "  default_date: '24 August'\n"
        "storage:\n"
        "  backend: sqlite\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("STORAGE__BACKEND", "supabase")
    cfg = Settings.load(config)
    assert cfg.storage.backend == "supabase"
    assert cfg.sheets.default_date == "24 August"


def test_environment_override_applies_with_and_without_yaml(tmp_path, monkeypatch):
    config = tmp_path / "settings.yaml"
    config.write_text("thresholds:\n  speed_alarm: 100\n", encoding="utf-8")
    monkeypatch.setenv("THRESHOLDS__SPEED_ALARM", "110")
    assert Settings.load(config).thresholds.speed_alarm == 110
    assert Settings().thresholds.speed_alarm == 110
    assert Settings.yaml_path is None
