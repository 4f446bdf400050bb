"""Record codecs.

A codec turns a record into the canonical on-disk text and back. The store is
polymorphic over this capability so it can hold either a typed
:class:`PaymentProfile` or an arbitrary JSON value.

Codecs raise ``ValueError``/``TypeError`` on bad input; the store wraps those
into :class:`~parkos_profile.errors.ProfileParseError` with the file path.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Protocol, TypeVar, Union

R = TypeVar("R")


def _reject_constant(name: str) -> Any:
    # json accepts NaN/Infinity by default; they are not JSON.
    raise ValueError(f"invalid JSON constant {name!r}")


def parse_json(text: Union[str, bytes]) -> Any:
    """Strict ``json.loads`` (no NaN/Infinity)."""

    if isinstance(text, bytes):
        text = text.decode("utf-8")
    return json.loads(text, parse_constant=_reject_constant)


def dump_canonical(value: Any) -> str:
    """Pretty-print *value* into the one canonical form written to disk."""

    return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False, allow_nan=False) + "\n"


class RecordCodec(Protocol[R]):
    def encode(self, record: R) -> str:
        ...

    def decode(self, text: str) -> R:
        ...


@dataclass(frozen=True)
class PaymentProfile:
    """Stored payment details (no CCV is ever persisted)."""

    card_number: str
    card_expiration: str
    zip_code: str
    license: str

    # python attribute -> on-disk key
    KEYS = {
        "card_number": "cardNumber",
        "card_expiration": "cardExpiration",
        "zip_code": "zipCode",
        "license": "license",
    }

    def to_dict(self) -> Dict[str, str]:
        return {self.KEYS[k]: v for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PaymentProfile":
        if not isinstance(data, Mapping):
            raise TypeError(f"payment profile must be a JSON object, got {type(data).__name__}")

        values: Dict[str, str] = {}
        for f in fields(cls):
            key = cls.KEYS[f.name]
            if key not in data:
                raise ValueError(f"missing field `{key}`")
            value = data[key]
            if not isinstance(value, str):
                raise TypeError(f"field `{key}` must be a string, got {type(value).__name__}")
            values[f.name] = value
        return cls(**values)


class PaymentProfileCodec:
    """Strict codec for :class:`PaymentProfile`.

    Unknown keys are ignored on decode and never written back.
    """

    def encode(self, record: Union[PaymentProfile, Mapping[str, Any]]) -> str:
        # Round-trip instances too, so encode enforces the same field types as decode.
        if isinstance(record, PaymentProfile):
            record = record.to_dict()
        record = PaymentProfile.from_dict(record)
        return dump_canonical(record.to_dict())

    def decode(self, text: str) -> PaymentProfile:
        return PaymentProfile.from_dict(parse_json(text))


class JsonValueCodec:
    """Pass-through codec for an arbitrary JSON value.

    ``encode`` accepts either a parsed value or JSON text. Text is parsed
    here rather than trusted, so differently formatted but equal inputs
    always end up as the same bytes.
    """

    def encode(self, record: Any) -> str:
        if isinstance(record, (str, bytes)):
            record = parse_json(record)
        return dump_canonical(record)

    def decode(self, text: str) -> Any:
        return parse_json(text)


__all__ = [
    "JsonValueCodec",
    "PaymentProfile",
    "PaymentProfileCodec",
    "RecordCodec",
    "dump_canonical",
    "parse_json",
]
