from __future__ import annotations

import json

import pytest

from parkos_profile.codecs import JsonValueCodec, PaymentProfile, PaymentProfileCodec, dump_canonical


def test_payment_profile_uses_camel_case_keys() -> None:
    profile = PaymentProfile(card_number="4111111111111111", card_expiration="12/29", zip_code="94107", license="ABC123")
    assert profile.to_dict() == {
        "cardNumber": "4111111111111111",
        "cardExpiration": "12/29",
        "zipCode": "94107",
        "license": "ABC123",
    }


def test_typed_codec_drops_unknown_keys() -> None:
    codec = PaymentProfileCodec()
    text = json.dumps(
        {"cardNumber": "1", "cardExpiration": "2", "zipCode": "3", "license": "4", "cardCCV": "123"}
    )
    profile = codec.decode(text)
    assert "cardCCV" not in codec.encode(profile)


def test_typed_codec_errors_name_the_field() -> None:
    codec = PaymentProfileCodec()
    with pytest.raises(ValueError, match="license"):
        codec.decode('{"cardNumber": "1", "cardExpiration": "2", "zipCode": "3"}')
    with pytest.raises(TypeError, match="zipCode"):
        codec.decode('{"cardNumber": "1", "cardExpiration": "2", "zipCode": null, "license": "4"}')


def test_canonical_dump_is_sorted_and_newline_terminated() -> None:
    assert dump_canonical({"b": 1, "a": "é"}) == '{\n  "a": "é",\n  "b": 1\n}\n'


def test_json_value_codec_accepts_text_and_values() -> None:
    codec = JsonValueCodec()
    assert codec.encode('[1,2]') == codec.encode([1, 2])
    assert codec.encode(b'{"x": 1}') == codec.encode({"x": 1})
    assert codec.decode("null") is None

    with pytest.raises(ValueError):
        codec.encode("Infinity")
    with pytest.raises(TypeError):
        codec.encode({"x": object()})


def test_typed_codec_checks_field_types_of_instances() -> None:
    bad = PaymentProfile(card_number=4111111111111111, card_expiration="12/29", zip_code="94107", license="ABC123")  # type: ignore[arg-type]
    with pytest.raises(TypeError, match="cardNumber"):
        PaymentProfileCodec().encode(bad)
