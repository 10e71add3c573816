"""Deterministic CF validation and the municipality lookup it relies on."""

from cfvalidator.decoders.codice_fiscale import validate, validate_codice_fiscale
from cfvalidator.decoders.municipalities import DatasetLoadError, get_municipalities, load_municipalities

__all__ = [
    "validate",
    "validate_codice_fiscale",
    "DatasetLoadError",
    "get_municipalities",
    "load_municipalities",
]
