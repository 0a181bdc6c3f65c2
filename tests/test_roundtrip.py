"""Round trip every registered payload type through the codec."""

import dataclasses
from datetime import datetime
from typing import Any, Union, get_type_hints

import pytest

from hyper_types.codec import (JSON, SKIP, YAML, Timestamp, decode, encode,
                               from_json, is_empty, nullable_fields,
                               parse_time, to_json, wire_fields)
from hyper_types.endpoints import payload_types

NANO_TIME = "2016-06-07T20:31:11.853781916Z"

PAYLOAD_TYPES = sorted(payload_types().items())
TYPE_IDS = [name for name, _ in PAYLOAD_TYPES]
TYPES = [cls for _, cls in PAYLOAD_TYPES]


def sample(hint, nil=False):
    """
    Build a well-formed value for a type hint.

    Every scalar is non-zero and every collection holds one entry, so each
    omit-if-empty key is set. With nil, the record's own Optional fields,
    lists and maps are None instead; nested records stay filled.
    """
    if hint is Any:
        return "value"

    origin = getattr(hint, "__origin__", None)
    args = getattr(hint, "__args__", ()) or ()

    if origin is Union:
        if nil:
            return None
        return sample(next(a for a in args if a is not type(None)))
    if origin is list:
        return None if nil else [sample(args[0])]
    if origin is dict:
        return None if nil else {"key": sample(args[1])}
    if origin is tuple:
        return tuple(sample(a) for a in args)

    if dataclasses.is_dataclass(hint):
        hints = get_type_hints(hint)
        return hint(**{
            f.name: sample(hints[f.name], nil)
            for f, _ in wire_fields(hint)
        })

    if hint is bool:
        return True
    if hint is int:
        return 7
    if hint is float:
        return 1.5
    if hint is str:
        return "text"
    if hint is datetime:
        return parse_time(NANO_TIME)
    raise TypeError(f"no sample for {hint!r}")


def omitempty_keys(cls, style=JSON):
    """(field name, wire key) for each omit-if-empty field encoded in style."""
    return [
        (f.name, meta.key(style))
        for f, meta in wire_fields(cls)
        if meta.omits_empty(style) and meta.key(style) != SKIP
    ]


@pytest.mark.parametrize("cls", TYPES, ids=TYPE_IDS)
class TestRoundTrip:
    """Test decode then encode gives back the same payload."""

    @pytest.mark.parametrize("style", [JSON, YAML])
    def test_filled(self, cls, style):
        payload = encode(sample(cls), style)
        assert encode(decode(cls, payload, style, strict=True), style) == payload

    @pytest.mark.parametrize("style", [JSON, YAML])
    def test_nil_fields(self, cls, style):
        payload = encode(sample(cls, nil=True), style)
        assert encode(decode(cls, payload, style, strict=True), style) == payload

    def test_default(self, cls):
        payload = encode(cls())
        assert encode(decode(cls, payload, strict=True)) == payload

    def test_json_text(self, cls):
        text = to_json(sample(cls, nil=True))
        assert to_json(from_json(cls, text, strict=True)) == text


@pytest.mark.parametrize("cls", TYPES, ids=TYPE_IDS)
class TestOmitEmpty:
    """Test omit-if-empty keys follow their values."""

    @pytest.mark.parametrize("style", [JSON, YAML])
    def test_present_when_set(self, cls, style):
        data = encode(sample(cls), style)
        for _, key in omitempty_keys(cls, style):
            assert key in data

    @pytest.mark.parametrize("style", [JSON, YAML])
    def test_absent_when_empty(self, cls, style):
        value = cls()
        nullable = nullable_fields(cls)
        data = encode(value, style)
        for name, key in omitempty_keys(cls, style):
            current = getattr(value, name)
            empty = current is None if name in nullable else is_empty(current)
            assert (key in data) is not empty

    def test_nil_collections_absent_or_null(self, cls):
        value = sample(cls, nil=True)
        data = encode(value)
        omitted = {key for _, key in omitempty_keys(cls)}
        for f, meta in wire_fields(cls):
            if meta.json_key == SKIP:
                continue
            if getattr(value, f.name) is None:
                if meta.json_key in omitted:
                    assert meta.json_key not in data
                else:
                    assert data[meta.json_key] is None


class TestSample:
    """Test the fixtures themselves carry the edge cases."""

    def test_timestamps_keep_nanoseconds(self):
        value = sample(datetime)
        assert isinstance(value, Timestamp)
        assert value.nanosecond == 916
        assert encode(value) == NANO_TIME

    def test_some_types_have_timestamps(self):
        names = {
            name
            for name, cls in PAYLOAD_TYPES
            if NANO_TIME in to_json(sample(cls))
        }
        assert "Volume" in names

    def test_some_types_have_nil_collections(self):
        assert any(
            "null" in to_json(sample(cls, nil=True)) for cls in TYPES
        )


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
