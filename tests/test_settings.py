"""Test layered YAML settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from year_pack import constants
from year_pack.settings import EngineConfig, Settings, load_settings

CONFIGS = Path(__file__).resolve().parents[1] / "configs"


def test_defaults_match_constants():
    s = Settings()
    assert s.runtime.dry_run is False
    assert s.engine.max_line_chars == constants.MAX_LINE_CHARS
    assert s.engine.min_df == constants.MIN_DF
    assert s.engine.max_df_ratio == constants.MAX_DF_RATIO
    assert s.engine.min_questions_for_topics == constants.MIN_QUESTIONS_FOR_TOPICS
    assert s.engine.max_records == constants.MAX_RECORDS


def test_dev_config_overrides_base():
    s = Settings.load(str(CONFIGS / "dev.yaml"))
    assert s.logging.level == "DEBUG"
    assert s.logging.format == "human"
    assert s.logging.structured is False
    # inherited from base.yaml
    assert s.engine.top_unigrams == 50
    assert s.engine.kmeans_iterations == 25


def test_prod_config():
    s = Settings.load(str(CONFIGS / "prod.yaml"))
    assert s.logging.format == "json"
    assert s.logging.structured is True


def test_deep_merge(tmp_path):
    (tmp_path / "base.yaml").write_text(
        "engine:\n  min_df: 5\n  top_bigrams: 30\nlogging:\n  level: INFO\n",
        encoding="utf-8",
    )
    (tmp_path / "ci.yaml").write_text("engine:\n  min_df: 2\n", encoding="utf-8")

    s = Settings.load(str(tmp_path / "ci.yaml"))
    assert s.engine.min_df == 2
    assert s.engine.top_bigrams == 30
    assert s.logging.level == "INFO"


def test_missing_files_fall_back_to_defaults(tmp_path):
    s = Settings.load(str(tmp_path / "nope.yaml"))
    assert s.engine == EngineConfig()


def test_env_nested_override(monkeypatch):
    monkeypatch.setenv("YEAR_PACK_ENGINE__MIN_DF", "7")
    assert Settings().engine.min_df == 7


def test_load_settings_uses_root(tmp_path, monkeypatch):
    configs = tmp_path / "configs"
    configs.mkdir()
    (configs / "base.yaml").write_text("engine:\n  top_unigrams: 10\n", encoding="utf-8")
    (configs / "staging.yaml").write_text("logging:\n  level: WARNING\n", encoding="utf-8")
    monkeypatch.setenv("YEAR_PACK_ROOT", str(tmp_path))

    s = load_settings("staging")
    assert s.engine.top_unigrams == 10
    assert s.logging.level == "WARNING"


def test_load_settings_env_from_environment(tmp_path, monkeypatch):
    configs = tmp_path / "configs"
    configs.mkdir()
    (configs / "qa.yaml").write_text("runtime:\n  dry_run: true\n", encoding="utf-8")
    monkeypatch.setenv("YEAR_PACK_ROOT", str(tmp_path))
    monkeypatch.setenv("YEAR_PACK_ENV", "qa")

    assert load_settings().runtime.dry_run is True


def test_engine_bounds_rejected():
    with pytest.raises(ValidationError):
        EngineConfig(max_df_ratio=0)
    with pytest.raises(ValidationError):
        EngineConfig(min_df=0)
