"""Central constants for the year_pack project."""

# Sanitized lines longer than this are cut with a visible marker.
MAX_LINE_CHARS = 280
TRUNCATION_MARKER = "[TRUNCATED]"

# Sanitized content shorter than this is not treated as a question.
MIN_QUESTION_CHARS = 10

MIN_QUESTIONS_FOR_TOPICS = 50
MIN_TOPIC_SHARE = 0.02

DEFAULT_MAX_SAMPLES = 30
DEFAULT_MAX_SAMPLE_LENGTH = 120
MIN_SAMPLE_CHARS = 20

DEFAULT_TOPICS_COUNT = 7
KMEANS_ITERATIONS = 25
TOP_TERMS_PER_TOPIC = 5

MIN_DF = 5
MAX_DF_RATIO = 0.6

TOP_UNIGRAMS = 50
TOP_BIGRAMS = 30

# Upper bound on records materialized for one year.
MAX_RECORDS = 100_000

SUPPORTED_LANGUAGES = ("en", "zh")

# Week-number thresholds approximating Jan-Apr / May-Aug / Sep-Dec.
EARLY_PERIOD_LAST_WEEK = 17
MID_PERIOD_LAST_WEEK = 35

SANITIZATION_FILTERS = (
    "user_messages_only",
    "code_blocks_removed",
    "commands_removed",
    "paths_masked",
    "urls_masked",
    "emails_masked",
    "ips_masked",
    "secrets_masked",
    "truncated_long_text",
)

SAFETY_GUARANTEES = (
    "no_executable_content",
    "no_file_paths",
    "no_urls",
    "no_credentials",
)

DEFAULT_NOTES = (
    "Data is aggregated and sanitized for entertainment purposes.",
    "Topic trends indicate focus shifts, not exact timelines.",
)
