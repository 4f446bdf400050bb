import json
import os
import stat
from pathlib import Path

import pytest

from parkos_profile import (
    JsonValueCodec,
    PathResolutionError,
    PaymentProfile,
    ProfileIOError,
    ProfileParseError,
    ProfileStore,
)
from parkos_profile.paths import fixed_dir

SAMPLE = {
    "cardNumber": "4111111111111111",
    "cardExpiration": "12/29",
    "zipCode": "94107",
    "license": "ABC123",
}


def _store(tmp_path: Path, **kwargs) -> ProfileStore:
    return ProfileStore(path_provider=fixed_dir(tmp_path / "app-data"), **kwargs)


def test_load_missing_returns_none(tmp_path: Path):
    store = _store(tmp_path)
    assert store.load() is None
    assert not store.path().exists()


def test_save_then_load_roundtrip(tmp_path: Path):
    store = _store(tmp_path)
    store.save(PaymentProfile.from_dict(SAMPLE))

    loaded = store.load()
    assert isinstance(loaded, PaymentProfile)
    assert loaded.to_dict() == SAMPLE


def test_concrete_scenario_raw_file_is_pretty_json(tmp_path: Path):
    store = _store(tmp_path)
    assert store.load() is None
    assert not (tmp_path / "app-data").exists()

    store.save(SAMPLE)

    p = store.path()
    assert p == tmp_path / "app-data" / "payment_profile.json"
    raw = p.read_text(encoding="utf-8")
    assert json.loads(raw) == SAMPLE
    assert raw.startswith("{\n  ")
    for value in SAMPLE.values():
        assert f'"{value}"' in raw
    assert store.load().to_dict() == SAMPLE


def test_save_creates_missing_ancestors(tmp_path: Path):
    store = ProfileStore(path_provider=fixed_dir(tmp_path / "a" / "b" / "c"))
    store.save(SAMPLE)
    assert (tmp_path / "a" / "b" / "c" / "payment_profile.json").is_file()


def test_save_is_idempotent(tmp_path: Path):
    store = _store(tmp_path)
    store.save(SAMPLE)
    first = store.path().read_bytes()
    store.save(PaymentProfile.from_dict(SAMPLE))
    assert store.path().read_bytes() == first


def test_save_overwrites_single_slot(tmp_path: Path):
    store = _store(tmp_path)
    store.save(SAMPLE)
    store.save(dict(SAMPLE, zipCode="10001"))

    assert store.load().zip_code == "10001"
    assert [p.name for p in store.path().parent.iterdir()] == ["payment_profile.json"]


def test_corrupt_file_is_parse_error_not_none(tmp_path: Path):
    store = _store(tmp_path)
    p = store.path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text("{not json", encoding="utf-8")

    with pytest.raises(ProfileParseError) as exc_info:
        store.load()
    assert exc_info.value.kind == "parse"
    assert exc_info.value.path == p
    assert "Failed to parse payment profile file" in str(exc_info.value)


@pytest.mark.parametrize(
    "doc",
    [
        {"cardNumber": "4111111111111111", "cardExpiration": "12/29", "zipCode": "94107"},
        dict(SAMPLE, zipCode=94107),
        [SAMPLE],
    ],
)
def test_typed_load_rejects_missing_or_mistyped_fields(tmp_path: Path, doc):
    store = _store(tmp_path)
    p = store.path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(doc), encoding="utf-8")

    with pytest.raises(ProfileParseError):
        store.load()


def test_typed_save_rejects_incomplete_record_before_writing(tmp_path: Path):
    store = _store(tmp_path)
    with pytest.raises(ProfileParseError):
        store.save({"cardNumber": "4111111111111111"})
    assert not store.path().parent.exists()


def test_opaque_roundtrip_and_canonical_form(tmp_path: Path):
    store = _store(tmp_path, codec=JsonValueCodec())
    store.save('{"b": [1, 2, {"c": null}],   "a": "x"}')
    first = store.path().read_bytes()
    assert store.load() == {"a": "x", "b": [1, 2, {"c": None}]}

    store.save({"a": "x", "b": [1, 2, {"c": None}]})
    assert store.path().read_bytes() == first


def test_opaque_malformed_text_leaves_previous_file_untouched(tmp_path: Path):
    store = _store(tmp_path, codec=JsonValueCodec())
    store.save({"keep": True})
    before = store.path().read_bytes()

    with pytest.raises(ProfileParseError):
        store.save("{not json")
    with pytest.raises(ProfileParseError):
        store.save("NaN")

    assert store.path().read_bytes() == before
    assert store.load() == {"keep": True}


def test_no_temporary_files_left_behind(tmp_path: Path):
    store = _store(tmp_path)
    store.save(SAMPLE)
    store.save(SAMPLE)
    assert sorted(p.name for p in store.path().parent.iterdir()) == ["payment_profile.json"]


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits only")
def test_saved_file_is_owner_only(tmp_path: Path):
    store = _store(tmp_path)
    store.save(SAMPLE)
    assert stat.S_IMODE(store.path().stat().st_mode) == 0o600


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits only")
def test_chmod_failure_fails_the_save(tmp_path: Path, monkeypatch):
    store = _store(tmp_path)

    def _boom(path, mode):
        raise PermissionError("operation not permitted")

    monkeypatch.setattr("parkos_profile.store.os.chmod", _boom)

    with pytest.raises(ProfileIOError) as exc_info:
        store.save(SAMPLE)
    assert exc_info.value.kind == "io"
    assert "permissions" in str(exc_info.value)
    # data reached the disk; the caller has to retry the whole save
    assert store.path().exists()


def test_directory_creation_failure_is_io_error(tmp_path: Path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x", encoding="utf-8")
    store = ProfileStore(path_provider=fixed_dir(blocker / "app"))

    with pytest.raises(ProfileIOError) as exc_info:
        store.save(SAMPLE)
    assert "directory" in str(exc_info.value)


def test_read_failure_is_io_error(tmp_path: Path):
    store = _store(tmp_path)
    store.path().mkdir(parents=True)

    with pytest.raises(ProfileIOError):
        store.load()


def test_path_provider_failure_is_path_resolution_error(tmp_path: Path):
    def _provider() -> Path:
        raise OSError("sandbox denied")

    store = ProfileStore(path_provider=_provider)
    with pytest.raises(PathResolutionError) as exc_info:
        store.load()
    assert exc_info.value.kind == "path_resolution"
    with pytest.raises(PathResolutionError):
        store.save(SAMPLE)


def test_replace_failure_keeps_previous_file_and_cleans_up(tmp_path: Path, monkeypatch):
    store = _store(tmp_path)
    store.save(SAMPLE)
    before = store.path().read_bytes()

    def _boom(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("parkos_profile.store.os.replace", _boom)

    with pytest.raises(ProfileIOError) as exc_info:
        store.save(dict(SAMPLE, zipCode="10001"))
    assert "Failed to write payment profile file" in str(exc_info.value)
    assert store.path().read_bytes() == before
    assert sorted(p.name for p in store.path().parent.iterdir()) == ["payment_profile.json"]


@pytest.mark.parametrize("base", [None, "", Path("")])
def test_empty_provider_result_is_path_resolution_error(base):
    store = ProfileStore(path_provider=lambda: base)
    with pytest.raises(PathResolutionError):
        store.path()


def test_typed_save_rejects_mistyped_instance(tmp_path: Path):
    store = _store(tmp_path)
    bad = PaymentProfile(card_number=4111111111111111, card_expiration="12/29", zip_code="94107", license="ABC123")
    with pytest.raises(ProfileParseError):
        store.save(bad)
    assert not store.path().exists()
