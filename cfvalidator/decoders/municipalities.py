"""Municipality dataset loader: catastral (Belfiore) code → place name.

Two readers over the same file:
  - ``scan``: lenient pattern scan for ``"cod_fisco": "XXXX"`` followed by
    ``"comune": "..."`` anywhere in the text, across line boundaries. Works on
    any JSON-like layout that lists the two fields in that order.
  - ``json``: strict JSON list of ``{"cod_fisco": ..., "comune": ...}`` records.

The loaded mapping is read-only and may be shared across validations.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType

from pydantic import TypeAdapter, ValidationError

from cfvalidator.config import settings
from cfvalidator.schemas.validation import MunicipalityRecord

logger = logging.getLogger(__name__)

_RECORD_PATTERN = re.compile(
    r'"cod_fisco"\s*:\s*"([A-Z0-9]{4})".*?"comune"\s*:\s*"([^"]+)"',
    re.IGNORECASE | re.DOTALL | re.ASCII,
)

_RECORDS_ADAPTER = TypeAdapter(list[MunicipalityRecord])

FORMATS = ("scan", "json")


class DatasetLoadError(Exception):
    """Raised when the municipality dataset cannot be read or parsed."""


# ---------------------------------------------------------------------------
# Parsers
# ---------------------------------------------------------------------------


def scan_municipalities(text: str) -> dict[str, str]:
    """Extract every (cod_fisco, comune) pair from semi-structured text.

    Codes are uppercased; a code seen twice keeps the last name.
    """
    return {code.upper(): name for code, name in _RECORD_PATTERN.findall(text)}


def parse_municipalities_json(text: str) -> dict[str, str]:
    """Parse a strict JSON list of municipality records.

    Raises:
        DatasetLoadError: If the document is not a list of valid records.
    """
    try:
        records = _RECORDS_ADAPTER.validate_json(text)
    except ValidationError as exc:
        msg = f"Invalid municipality dataset: {exc.error_count()} validation error(s)"
        raise DatasetLoadError(msg) from exc
    return {record.cod_fisco: record.comune for record in records}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_municipalities(path: str | Path, fmt: str = "scan") -> Mapping[str, str]:
    """Load the municipality dataset from disk.

    Args:
        path: Dataset file, read as UTF-8.
        fmt: ``"scan"`` (lenient pattern scan) or ``"json"`` (strict records).

    Returns:
        Read-only mapping of uppercase 4-character code → place name.

    Raises:
        DatasetLoadError: If the file cannot be read or (``json``) parsed.
        ValueError: If ``fmt`` is not a known format.
    """
    if fmt not in FORMATS:
        msg = f"Unknown dataset format: {fmt}. Must be one of {FORMATS}"
        raise ValueError(msg)

    path = Path(path)
    try:
        text = path.read_bytes().decode("utf-8", errors="replace")
    except OSError as exc:
        msg = f"Cannot read municipality dataset {path}: {exc.strerror or exc}"
        raise DatasetLoadError(msg) from exc

    codes = scan_municipalities(text) if fmt == "scan" else parse_municipalities_json(text)

    if codes:
        logger.info("Loaded %d municipality codes from %s (%s)", len(codes), path, fmt)
    else:
        logger.warning("Municipality dataset %s yielded no codes", path)
    return MappingProxyType(codes)


@lru_cache(maxsize=1)
def get_municipalities() -> Mapping[str, str]:
    """Load the configured dataset once per process."""
    return load_municipalities(
        settings.dataset.municipalities_path,
        settings.dataset.municipalities_format,
    )
