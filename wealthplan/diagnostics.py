"""Recoverable input problems collected during a projection."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class Diagnostics:
    dangling_references: list[str] = field(default_factory=list)
    non_finite_fields: list[str] = field(default_factory=list)

    @property
    def has_issues(self) -> bool:
        return bool(self.dangling_references or self.non_finite_fields)

    def dangling(self, record_id: str, category_id: str) -> None:
        message = f"record '{record_id}' references missing category '{category_id}'"
        logger.warning("Ignoring %s", message)
        self.dangling_references.append(message)

    def merge(self, other: "Diagnostics") -> None:
        for item in other.dangling_references:
            if item not in self.dangling_references:
                self.dangling_references.append(item)
        for item in other.non_finite_fields:
            if item not in self.non_finite_fields:
                self.non_finite_fields.append(item)


def finite_or_zero(value: object, field_path: str, diagnostics: Diagnostics | None = None) -> float:
    """Coerce a monetary or rate leaf to a finite float, substituting zero."""
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value)
        except ValueError:
            number = math.nan
    else:
        number = math.nan

    if math.isfinite(number):
        return number

    logger.warning("%s: non-finite or missing amount %r replaced with 0", field_path, value)
    if diagnostics is not None and field_path not in diagnostics.non_finite_fields:
        diagnostics.non_finite_fields.append(field_path)
    return 0.0
