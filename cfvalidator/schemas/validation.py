"""Pydantic schemas for the codice fiscale validator and its reference data.

Pure data classes, no I/O. Used as the output of the validator and as the
record type of the strict municipality dataset reader.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Gender(str, Enum):
    """Sex encoded in the day field (day + 40 for females)."""

    MALE = "M"
    FEMALE = "F"


# ---------------------------------------------------------------------------
# Validator output
# ---------------------------------------------------------------------------


class ValidationResult(BaseModel):
    """Itemized outcome of validating a codice fiscale.

    ``messages`` holds one entry per check, in order: format, month, day/sex,
    municipality, check character. When the length gate fails it holds a
    single entry and every decoded field stays None.
    """

    valid: bool
    codice_fiscale: str
    messages: list[str] = Field(default_factory=list)

    month: int | None = None               # 1–12
    day: int | None = None                 # 1–31, female offset removed
    gender: Gender | None = None
    birthplace_code: str | None = None     # normalized, e.g. "H501"
    birthplace_name: str | None = None     # e.g. "Roma"
    foreign_birthplace: bool = False       # Z*** codes
    expected_check: str | None = None      # None when unresolvable
    found_check: str | None = None


# ---------------------------------------------------------------------------
# Municipality dataset
# ---------------------------------------------------------------------------


class MunicipalityRecord(BaseModel):
    """One entry of the strict JSON municipality dataset."""

    cod_fisco: str = Field(pattern=r"^[A-Za-z0-9]{4}$")
    comune: str = Field(min_length=1)

    @field_validator("cod_fisco")
    @classmethod
    def uppercase_code(cls, v: str) -> str:
        return v.upper()
