import pytest

from presigned_upload.application.presign.metadata import (
    METADATA_PREFIX,
    normalize_metadata,
)


def test_normalize_prefixes_and_param_cases_keys():
    out = normalize_metadata({"userId": "42", "Original Name": "a b.png"})

    assert out == {
        "x-amz-meta-user-id": "42",
        "x-amz-meta-original-name": "a b.png",
    }


def test_normalize_keeps_values_unchanged():
    out = normalize_metadata({"note": "  Mixed CASE value  "})
    assert out["x-amz-meta-note"] == "  Mixed CASE value  "


def test_normalize_empty_and_none():
    assert normalize_metadata(None) == {}
    assert normalize_metadata({}) == {}


def test_normalize_one_entry_per_unique_key():
    src = {"a": "1", "bKey": "2", "c_key": "3"}
    out = normalize_metadata(src)

    assert len(out) == len(src)
    assert all(k.startswith(METADATA_PREFIX) for k in out)


def test_colliding_keys_last_one_wins():
    # "userId" and "user_id" both become x-amz-meta-user-id
    out = normalize_metadata({"userId": "first", "user_id": "second"})
    assert out == {"x-amz-meta-user-id": "second"}


@pytest.mark.parametrize(
    "src",
    [
        {"café": "1", "名前": "2", "größe": "3"},
        {"名前": "1", "住所": "2"},
        {"a+b": "1", "a=b": "2", "a:b": "3"},
    ],
)
def test_non_ascii_and_punctuation_keys_stay_distinct(src):
    out = normalize_metadata(src)

    assert len(out) == len(src)
    assert all(k != METADATA_PREFIX for k in out)


def test_non_ascii_keys_are_preserved():
    out = normalize_metadata({"café": "1", "名前": "2"})
    assert out == {"x-amz-meta-café": "1", "x-amz-meta-名前": "2"}


@pytest.mark.parametrize("name", ["", "__", " - "])
def test_key_without_name_characters_is_rejected(name):
    with pytest.raises(ValueError):
        normalize_metadata({name: "1"})
