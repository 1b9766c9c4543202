"""Data access helpers for turnorder."""

from .errors import DataError, DataLoadError, DataValidationError
from .json_loader import load_json
from .paths import get_definitions_path, get_repo_root
from .roster_codec import roster_from_payload, roster_to_payload

__all__ = [
    "DataError",
    "DataLoadError",
    "DataValidationError",
    "get_definitions_path",
    "get_repo_root",
    "load_json",
    "roster_from_payload",
    "roster_to_payload",
]
