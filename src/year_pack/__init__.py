"""Sanitized, aggregated year-in-review packs from chat history."""

from year_pack.engine import build_year_pack, generate_year_pack, process_records
from year_pack.errors import ConfigurationError, RecordFormatError
from year_pack.prompt import generate_prompt_template
from year_pack.schemas import RawRecord, YearPack, YearPackInput, YearPackResult, validate_input

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "RawRecord",
    "RecordFormatError",
    "YearPack",
    "YearPackInput",
    "YearPackResult",
    "build_year_pack",
    "generate_prompt_template",
    "generate_year_pack",
    "process_records",
    "validate_input",
]
