# FILE: tests/test_config.py
import pytest
from pydantic import ValidationError

from squad_core.config import DEFAULT_CONFIG, ensure_assets_exist, load_config


def test_defaults_without_file():
    cfg = load_config(None)
    assert cfg.autosave_delay == DEFAULT_CONFIG["autosave_delay"]
    assert cfg.generator_batch_size == DEFAULT_CONFIG["generator_batch_size"]


def test_yaml_overrides(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("autosave_delay: 0.1\nlog_level: debug\n", encoding="utf-8")
    cfg = load_config(str(path))
    assert cfg.autosave_delay == 0.1
    assert cfg.log_level == "DEBUG"
    assert cfg.data_dir == "data"


def test_bad_values_rejected(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("log_level: chatty\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(str(path))
    path.write_text("generator_batch_size: 0\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(str(path))


def test_assets_written_once(tmp_path):
    root = tmp_path / "assets"
    ensure_assets_exist(str(root))
    assert (root / "teams.yaml").exists()
    (root / "teams.yaml").write_text("teams: []\n", encoding="utf-8")
    ensure_assets_exist(str(root))
    assert (root / "teams.yaml").read_text(encoding="utf-8") == "teams: []\n"
    assert (root / "sample_squad.csv").exists()
