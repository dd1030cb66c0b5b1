"""
Centralized schema definitions for the year_pack project.

This module provides:
- Pydantic models for records flowing through the pipeline
- Pydantic models for the YearPack output aggregate (camelCase on the wire)
- The validated input configuration and its ConfigurationError wrapper

Output models keep snake_case attributes in Python and serialize with the
camelCase aliases consumers expect: ``year_pack.model_dump(by_alias=True)``.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from year_pack import constants
from year_pack.errors import ConfigurationError

Language = Literal["en", "zh"]
Period = Literal["early", "mid", "late"]


class _ValueModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# ===== PIPELINE RECORDS =====


class RawRecord(_ValueModel):
    """One timestamped end-user utterance as handed over by the record store."""

    text: str = Field(..., description="Unsanitized message text")
    timestamp: datetime = Field(..., description="When the message was sent")


class SanitizedRecord(_ValueModel):
    """A RawRecord after sanitization, tagged with calendar metadata."""

    content: str = Field(..., description="Masked and truncated text")
    original_length: int = Field(..., ge=0, description="Length before sanitization")
    timestamp: datetime
    month: str = Field(..., description='Month key, "YYYY-MM"')
    week: int = Field(..., ge=1, le=53, description="ISO-8601 week number")


class WeekDocument(_ValueModel):
    """All sanitized content of one week, the unit of topic discovery."""

    week: int = Field(..., ge=1, le=53)
    year: int
    period: Period
    content: str
    question_count: int = Field(..., ge=1)


class TfIdfResult(_ValueModel):
    """Sparse term weights per week document plus the shared vocabulary.

    ``vectors[i]`` belongs to the i-th input document; absent terms weigh 0.
    """

    vectors: List[Dict[str, float]]
    vocabulary: List[str]


class Cluster(_ValueModel):
    id: int
    centroid: Dict[str, float]
    members: List[int] = Field(default_factory=list, description="Document indices")
    top_terms: List[str] = Field(default_factory=list)


class ActivityStats(_ValueModel):
    total_questions: int
    active_months: int
    monthly_distribution: Dict[str, int]
    length_buckets: "LengthBuckets"


# ===== YEAR PACK OUTPUT =====


class KeywordItem(_ValueModel):
    term: str
    count: int = Field(..., ge=1)


class KeywordTables(_ValueModel):
    top_unigrams: List[KeywordItem] = Field(default_factory=list, alias="topUnigrams")
    top_bigrams: List[KeywordItem] = Field(default_factory=list, alias="topBigrams")


class TopicTrend(_ValueModel):
    """Share of a topic's questions per year period (Jan-Apr / May-Aug / Sep-Dec)."""

    early: float = Field(0.0, ge=0.0, le=1.0)
    mid: float = Field(0.0, ge=0.0, le=1.0)
    late: float = Field(0.0, ge=0.0, le=1.0)


class Topic(_ValueModel):
    id: int
    name: str
    share: float = Field(..., ge=0.0, le=1.0)
    keywords: List[str] = Field(default_factory=list)
    trend: TopicTrend = Field(default_factory=TopicTrend)


class SampleSet(_ValueModel):
    questions: List[str] = Field(default_factory=list)
    max_length: int = Field(..., alias="maxLength")


class LengthBuckets(_ValueModel):
    short: int = 0  # <= 100 chars
    medium: int = 0  # 101-280 chars
    long: int = 0  # >= 281 chars


class YearPackStats(_ValueModel):
    total_questions: int = Field(..., alias="totalQuestions")
    active_months: int = Field(..., alias="activeMonths")
    monthly_distribution: Dict[str, int] = Field(
        default_factory=dict, alias="monthlyDistribution"
    )


class YearPackMeta(_ValueModel):
    year: int
    language: Language
    generated_at: str = Field(..., alias="generatedAt", description="ISO-8601 UTC")
    workspace: Optional[str] = None
    question_count: int = Field(..., alias="questionCount")
    session_count: int = Field(0, alias="sessionCount")


class SafetyInfo(_ValueModel):
    filters_applied: List[str] = Field(default_factory=list, alias="filtersApplied")
    guarantees: List[str] = Field(default_factory=list)


class YearPack(_ValueModel):
    meta: YearPackMeta
    stats: YearPackStats
    length_buckets: LengthBuckets = Field(..., alias="lengthBuckets")
    keywords: KeywordTables
    topics: List[Topic] = Field(default_factory=list)
    samples: SampleSet
    safety: SafetyInfo
    notes: List[str] = Field(default_factory=list)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)


class YearPackResult(_ValueModel):
    """Outcome of one engine invocation.

    ``status == "no_data"`` is the structured degradation for empty input;
    ``year_pack`` is None in that case and ``message`` explains why.
    """

    status: Literal["ok", "no_data"]
    year_pack: Optional[YearPack] = None
    message: str = ""


# ===== INPUT CONFIGURATION =====


class YearPackInput(_ValueModel):
    """Validated engine configuration. Out-of-range values are rejected."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    year: int = Field(default_factory=lambda: datetime.now().year, ge=1970)
    language: Language = "en"
    workspace: Optional[str] = None
    max_samples: int = Field(
        constants.DEFAULT_MAX_SAMPLES, ge=0, le=100, alias="maxSamples"
    )
    max_sample_length: int = Field(
        constants.DEFAULT_MAX_SAMPLE_LENGTH, ge=50, le=500, alias="maxSampleLength"
    )
    topics_count: int = Field(
        constants.DEFAULT_TOPICS_COUNT, ge=3, le=15, alias="topicsCount"
    )
    seed: Optional[int] = Field(None, ge=0, description="k-means++ seed")

    @field_validator("year")
    @classmethod
    def _year_not_in_future(cls, v: int) -> int:
        current = datetime.now().year
        if v > current:
            raise ValueError(f"year must be <= {current}")
        return v


def validate_input(args: Optional[Mapping[str, Any]] = None) -> YearPackInput:
    """Validate raw configuration, raising ConfigurationError on any violation.

    Accepts camelCase (``maxSamples``) and snake_case (``max_samples``) keys.
    ``None`` values are treated as "not provided" so optional CLI flags can be
    passed straight through.
    """
    data = {k: v for k, v in (args or {}).items() if v is not None}
    try:
        return YearPackInput(**data)
    except ValidationError as e:
        violations = []
        for err in e.errors():
            loc = ".".join(str(part) for part in err["loc"]) or "input"
            violations.append(f"{loc}: {err['msg']}")
        raise ConfigurationError(
            "Invalid year-pack configuration: " + "; ".join(violations),
            violations=violations,
        ) from e


ActivityStats.model_rebuild()
