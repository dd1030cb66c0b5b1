# src/year_pack/settings.py
import os

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from year_pack import constants
from year_pack.paths import Paths


class RuntimeConfig(BaseModel):
    dry_run: bool = False


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"  # "json" or "human"
    structured: bool = True


class EngineConfig(BaseModel):
    """Tuning knobs of the analytics pipeline.

    The defaults reproduce the published behaviour; changing them changes
    comparability of year packs across runs.
    """

    max_line_chars: int = Field(constants.MAX_LINE_CHARS, ge=20)
    min_df: int = Field(constants.MIN_DF, ge=1)
    max_df_ratio: float = Field(constants.MAX_DF_RATIO, gt=0.0, le=1.0)
    kmeans_iterations: int = Field(constants.KMEANS_ITERATIONS, ge=1)
    top_terms_per_topic: int = Field(constants.TOP_TERMS_PER_TOPIC, ge=1)
    top_unigrams: int = Field(constants.TOP_UNIGRAMS, ge=0)
    top_bigrams: int = Field(constants.TOP_BIGRAMS, ge=0)
    min_questions_for_topics: int = Field(constants.MIN_QUESTIONS_FOR_TOPICS, ge=1)
    min_topic_share: float = Field(constants.MIN_TOPIC_SHARE, ge=0.0, le=1.0)
    max_records: int = Field(constants.MAX_RECORDS, ge=1)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="YEAR_PACK_", env_nested_delimiter="__", extra="ignore"
    )
    runtime: RuntimeConfig = RuntimeConfig()
    logging: LoggingConfig = LoggingConfig()
    engine: EngineConfig = EngineConfig()

    @staticmethod
    def _deep_update(d: dict, u: dict) -> dict:
        # Recursively update dict d with values from u
        for k, v in u.items():
            if isinstance(v, dict) and isinstance(d.get(k), dict):
                d[k] = Settings._deep_update(d[k], v)
            else:
                d[k] = v
        return d

    @staticmethod
    def _read_yaml(path: str) -> dict:
        if not os.path.exists(path):
            return {}
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @staticmethod
    def load(path: str) -> "Settings":
        """Load settings from ``path`` layered over ``base.yaml`` beside it.

        Missing files contribute nothing, so a bare checkout still runs with
        the built-in defaults.
        """
        base_path = os.path.join(os.path.dirname(path), "base.yaml")
        base = Settings._read_yaml(base_path)
        override = {} if os.path.abspath(path) == os.path.abspath(base_path) else Settings._read_yaml(path)
        merged = Settings._deep_update(base, override)
        return Settings(**merged)


def load_settings(env: str | None = None) -> Settings:
    """Return settings for ``env`` (defaults to YEAR_PACK_ENV or 'dev')."""
    env = env or os.environ.get("YEAR_PACK_ENV", "dev")
    return Settings.load(str(Paths.configs() / f"{env}.yaml"))
