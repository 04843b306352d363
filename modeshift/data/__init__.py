"""Reference zones, profiles and personas."""

from .reference import (
    DEFAULT_REFERENCE_PATH,
    ReferenceData,
    ReferenceDataError,
    load_reference_data,
    parse_persona,
)

__all__ = [
    "DEFAULT_REFERENCE_PATH",
    "ReferenceData",
    "ReferenceDataError",
    "load_reference_data",
    "parse_persona",
]
