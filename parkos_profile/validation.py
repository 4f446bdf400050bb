"""Payment detail normalisation and validation.

Shared by the GUI form, the ``check`` CLI command and the save command. The
store itself never applies these rules: a stored record is valid as long as it
decodes.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

PAYMENT_DETAILS_FIELDS = (
    "cardNumber",
    "cardCCV",
    "cardExpiration",
    "zipCode",
    "license",
)

STORED_PAYMENT_DETAILS_FIELDS = (
    "cardNumber",
    "cardExpiration",
    "zipCode",
    "license",
)

PAYMENT_DETAILS_MISSING = "PAYMENT_DETAILS_MISSING"
PAYMENT_DETAILS_INVALID = "PAYMENT_DETAILS_INVALID"

_EXPIRY_RES = (
    re.compile(r"^([0-9]{2})\s*/\s*([0-9]{2})$"),
    re.compile(r"^([0-9]{2})([0-9]{2})$"),
)
_ZIP_RE = re.compile(r"^[A-Z0-9 -]{3,10}$")
_LICENSE_RE = re.compile(r"^[A-Z0-9 -]{2,12}$")
_CCV_RE = re.compile(r"^[0-9]{3,4}$")


@dataclass
class ValidationResult:
    normalized: Dict[str, str]
    missing_fields: List[str] = field(default_factory=list)
    invalid_fields: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.missing_fields and not self.invalid_fields


def _trimmed(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _digits(value: str) -> str:
    return re.sub(r"[^0-9]+", "", value)


def luhn_valid(digits: str) -> bool:
    if not digits or not re.fullmatch(r"[0-9]+", digits):
        return False
    total = 0
    double = False
    for ch in reversed(digits):
        d = int(ch)
        if double:
            d *= 2
            if d > 9:
                d -= 9
        total += d
        double = not double
    return total % 10 == 0


def normalize_card_number(value: str) -> str:
    digits = _digits(value)
    if not 12 <= len(digits) <= 19 or not luhn_valid(digits):
        return ""
    return digits


def normalize_ccv(value: str) -> str:
    digits = _digits(value)
    return digits if _CCV_RE.match(digits) else ""


def normalize_expiration(value: str, *, now: Optional[datetime] = None) -> str:
    """Return ``MM/YY`` for a non-expired ``MM/YY`` or ``MMYY`` value, else ``""``.

    A card stays valid until the last moment of its expiry month.
    """

    value = value.strip()
    match = None
    for rx in _EXPIRY_RES:
        match = rx.match(value)
        if match:
            break
    if not match:
        return ""

    month, year = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return ""

    full_year = 2000 + year
    last_day = calendar.monthrange(full_year, month)[1]
    expiry = datetime(full_year, month, last_day, 23, 59, 59, 999000)
    if expiry < (now or datetime.now()):
        return ""
    return f"{month:02d}/{year:02d}"


def normalize_zip_code(value: str) -> str:
    value = value.strip().upper()
    return value if _ZIP_RE.match(value) else ""


def normalize_license(value: str) -> str:
    value = value.strip().upper()
    return value if _LICENSE_RE.match(value) else ""


def _validate(
    data: Optional[Mapping[str, Any]],
    allowed: Sequence[str],
    *,
    license_fallback: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ValidationResult:
    data = data or {}
    rules: Dict[str, Callable[[str], str]] = {
        "cardNumber": normalize_card_number,
        "cardCCV": normalize_ccv,
        "cardExpiration": lambda v: normalize_expiration(v, now=now),
        "zipCode": normalize_zip_code,
        "license": normalize_license,
    }

    result = ValidationResult(normalized={name: "" for name in allowed})
    for name in allowed:
        raw = _trimmed(data.get(name))
        if name == "license" and not raw:
            raw = _trimmed(license_fallback)
        if not raw:
            result.missing_fields.append(name)
            continue
        normalized = rules[name](raw)
        if not normalized:
            result.invalid_fields.append(name)
            continue
        result.normalized[name] = normalized
    return result


def validate_payment_details(
    data: Optional[Mapping[str, Any]],
    *,
    license_fallback: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ValidationResult:
    """Validate a full payment payload, CCV included."""

    return _validate(data, PAYMENT_DETAILS_FIELDS, license_fallback=license_fallback, now=now)


def validate_stored_payment_details(
    data: Optional[Mapping[str, Any]],
    *,
    license_fallback: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ValidationResult:
    """Validate the four persisted fields; CCV is never stored."""

    return _validate(data, STORED_PAYMENT_DETAILS_FIELDS, license_fallback=license_fallback, now=now)


def _field_path(name: str) -> str:
    return f"paymentDetails.{name}"


def build_payment_details_validation_error(
    missing_fields: Sequence[str],
    invalid_fields: Sequence[str],
) -> Optional[Dict[str, Any]]:
    """Build the error payload shown to users, or ``None`` when nothing failed.

    Missing fields win over invalid ones for ``code``/``error``.
    """

    if not missing_fields and not invalid_fields:
        return None

    if missing_fields:
        payload: Dict[str, Any] = {
            "code": PAYMENT_DETAILS_MISSING,
            "error": "Missing payment details. Required: "
            + ", ".join(_field_path(f) for f in missing_fields)
            + ".",
            "missingFields": list(missing_fields),
        }
        if invalid_fields:
            payload["invalidFields"] = list(invalid_fields)
        return payload

    return {
        "code": PAYMENT_DETAILS_INVALID,
        "error": "Invalid payment details: " + ", ".join(_field_path(f) for f in invalid_fields) + ".",
        "invalidFields": list(invalid_fields),
    }


__all__ = [
    "PAYMENT_DETAILS_FIELDS",
    "PAYMENT_DETAILS_INVALID",
    "PAYMENT_DETAILS_MISSING",
    "STORED_PAYMENT_DETAILS_FIELDS",
    "ValidationResult",
    "build_payment_details_validation_error",
    "luhn_valid",
    "normalize_card_number",
    "normalize_ccv",
    "normalize_expiration",
    "normalize_license",
    "normalize_zip_code",
    "validate_payment_details",
    "validate_stored_payment_details",
]
