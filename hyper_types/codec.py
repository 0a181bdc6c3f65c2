#!/usr/bin/env python3
"""
Wire codec for hyper-types.

Every payload type is a dataclass whose fields are declared with
wire_field(). The field metadata records, per encoding:

- the key used on the wire ("-" keeps the field out of that encoding)
- whether the field is omit-if-empty

Two encodings share the same dataclasses:

    json    the remote API wire format
    yaml    hand-written structured configuration (e.g. security groups)

encode() turns a value into plain dicts/lists/scalars, decode() goes the
other way and raises DecodingError on anything that does not fit the
declared shape. to_json/from_json and to_yaml/from_yaml wrap both with text
serialization.

A list or map that arrives as null decodes to None and encodes back to null,
so code reading such fields treats None as empty. Timestamps decode to
Timestamp, which keeps all nine fractional digits of the wire form.
"""

import dataclasses
import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import (Any, Dict, Iterator, List, Optional, Tuple, Union,
                    get_type_hints)

import yaml

from hyper_types import config

logger = logging.getLogger(__name__)

JSON = "json"
YAML = "yaml"
STYLES = (JSON, YAML)

SKIP = "-"

# Metadata key under which WireField records are stored on dataclass fields
WIRE_METADATA = "hyper_types.wire"

# Zero value for timestamps, encoded as 0001-01-01T00:00:00Z
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)

_NoneType = type(None)

# Values a bare YAML key decodes to
_ZERO_VALUES = {str: "", int: 0, float: 0.0, bool: False}


class CodecError(Exception):
    """Base exception for encoding and decoding failures."""

    pass


class DecodingError(CodecError):
    """
    Raised when a payload does not match the shape of its type.

    Attributes:
        path: Dotted location of the offending value (e.g. "State.Pid")
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class EncodingError(CodecError):
    """Raised when a value cannot be represented on the wire."""

    pass


@dataclass(frozen=True)
class WireField:
    """Serialization metadata attached to one dataclass field."""

    json_key: str
    yaml_key: str
    omitempty: bool = False
    yaml_omitempty: bool = False

    def key(self, style: str) -> str:
        return self.json_key if style == JSON else self.yaml_key

    def omits_empty(self, style: str) -> bool:
        return self.omitempty if style == JSON else self.yaml_omitempty


def wire_field(
    json_name: str,
    *,
    yaml_name: Optional[str] = None,
    omitempty: bool = False,
    yaml_omitempty: Optional[bool] = None,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
) -> Any:
    """
    Declare a dataclass field with its wire names.

    Args:
        json_name: Key used in JSON payloads ("-" to never encode it)
        yaml_name: Key used in YAML; defaults to json_name lower-cased
        omitempty: Drop the key when the value is empty
        yaml_omitempty: Override omitempty for YAML only
        default: Default value
        default_factory: Default factory for mutable values

    Returns:
        A dataclasses.field() carrying a WireField record
    """
    if yaml_name is None:
        yaml_name = json_name.lower()
    if yaml_omitempty is None:
        yaml_omitempty = omitempty

    meta = {
        WIRE_METADATA: WireField(
            json_key=json_name,
            yaml_key=yaml_name,
            omitempty=omitempty,
            yaml_omitempty=yaml_omitempty,
        )
    }
    return dataclasses.field(
        default=default, default_factory=default_factory, metadata=meta
    )


def wire_fields(cls: type) -> Iterator[Tuple[dataclasses.Field, WireField]]:
    """Yield (field, metadata) pairs for every wire field of a dataclass."""
    for f in dataclasses.fields(cls):
        meta = f.metadata.get(WIRE_METADATA)
        if meta is not None:
            yield f, meta


def is_wire_type(obj: Any) -> bool:
    """Check whether obj is a wire dataclass (class or instance)."""
    if not dataclasses.is_dataclass(obj):
        return False
    cls = obj if isinstance(obj, type) else type(obj)
    return any(True for _ in wire_fields(cls))


def is_empty(value: Any) -> bool:
    """
    Check whether a value counts as empty for omit-if-empty fields.

    Nested records and timestamps are never empty.
    """
    if value is None or value is False:
        return True
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value == 0
    if isinstance(value, (str, list, dict, tuple)):
        return len(value) == 0
    return False


def _check_style(style: str) -> None:
    if style not in STYLES:
        raise ValueError(f"Unknown encoding style: {style!r}")


def _join(path: str, key: Union[str, int]) -> str:
    if isinstance(key, int):
        return f"{path}[{key}]"
    return f"{path}.{key}" if path else key


# =============================================================================
# Timestamps
# =============================================================================


class Timestamp(datetime):
    """
    A datetime that keeps the nanosecond digits of a wire timestamp.

    Attributes:
        nanosecond: Digits below the microsecond (0-999)

    Comparison and arithmetic behave as for datetime and ignore nanosecond;
    the digits only survive decode -> encode.
    """

    def __new__(cls, *args, nanosecond: int = 0, **kwargs):
        if not 0 <= nanosecond <= 999:
            raise ValueError(f"nanosecond must be in 0..999, got {nanosecond}")
        self = super().__new__(cls, *args, **kwargs)
        self.nanosecond = nanosecond
        return self


def format_time(value: datetime) -> str:
    """
    Format a timestamp as RFC 3339 with trimmed fractional seconds.

    Naive datetimes are treated as UTC. A Timestamp keeps up to nine
    fractional digits.
    """
    nanosecond = getattr(value, "nanosecond", 0)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)

    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond or nanosecond:
        text += "." + f"{value.microsecond:06d}{nanosecond:03d}".rstrip("0")

    offset = value.utcoffset()
    if not offset:
        return text + "Z"

    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    minutes = abs(minutes)
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def parse_time(text: str) -> datetime:
    """
    Parse an RFC 3339 timestamp.

    Up to nine fractional digits are kept; finer ones are truncated.

    Returns:
        Timestamp (a datetime subclass)

    Raises:
        ValueError: If text is not RFC 3339
    """
    match = _RFC3339.match(text)
    if not match:
        raise ValueError(f"not an RFC 3339 timestamp: {text!r}")

    year, month, day, hour, minute, second, fraction, zone = match.groups()
    digits = (fraction or "")[:9].ljust(9, "0")
    micro, nano = int(digits[:6]), int(digits[6:])

    if zone in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        delta = timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6]))
        tz = timezone(sign * delta) if delta else timezone.utc

    return Timestamp(
        int(year), int(month), int(day),
        int(hour), int(minute), int(second), micro,
        tzinfo=tz, nanosecond=nano,
    )


# =============================================================================
# Encoding
# =============================================================================


def encode(value: Any, style: str = JSON) -> Any:
    """
    Encode a value into plain JSON/YAML-compatible data.

    Args:
        value: Wire dataclass, list, dict or scalar
        style: "json" or "yaml"

    Returns:
        Nested dicts, lists and scalars

    Raises:
        EncodingError: If a value has no wire representation
    """
    _check_style(style)
    return _encode(value, style, "")


def _encode(value: Any, style: str, path: str) -> Any:
    if value is None or isinstance(value, (str, bool, int, float)):
        return value

    if isinstance(value, datetime):
        return format_time(value)

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _encode_record(value, style, path)

    if isinstance(value, (list, tuple)):
        return [_encode(item, style, _join(path, i)) for i, item in enumerate(value)]

    if isinstance(value, dict):
        out = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise EncodingError(
                    f"{path or '<root>'}: map keys must be strings, got {key!r}"
                )
            out[key] = _encode(item, style, _join(path, key))
        return out

    raise EncodingError(
        f"{path or '<root>'}: cannot encode {type(value).__name__} value"
    )


def _encode_record(record: Any, style: str, path: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    nullable = nullable_fields(type(record))
    for f, meta in wire_fields(type(record)):
        key = meta.key(style)
        if key == SKIP:
            continue
        value = getattr(record, f.name)
        if meta.omits_empty(style):
            # Optional fields are only omitted when unset, so Optional[int]
            # keeps an explicit 0
            if value is None if f.name in nullable else is_empty(value):
                continue
        out[key] = _encode(value, style, _join(path, key))
    return out


_nullable_cache: Dict[type, frozenset] = {}


def nullable_fields(cls: type) -> frozenset:
    """Names of the fields of cls declared Optional[...]."""
    names = _nullable_cache.get(cls)
    if names is None:
        hints = get_type_hints(cls)
        names = frozenset(
            f.name
            for f in dataclasses.fields(cls)
            if getattr(hints.get(f.name), "__origin__", None) is Union
            and _NoneType in hints[f.name].__args__
        )
        _nullable_cache[cls] = names
    return names


# =============================================================================
# Decoding
# =============================================================================


def decode(
    hint: Any, data: Any, style: str = JSON, strict: Optional[bool] = None
) -> Any:
    """
    Decode plain data into an instance of the given type.

    Args:
        hint: Target type (wire dataclass or typing hint like List[Image])
        data: Parsed JSON/YAML data
        style: "json" or "yaml"
        strict: Reject unknown keys; defaults to HYPER_TYPES_STRICT

    Returns:
        Decoded value

    Raises:
        DecodingError: If data does not match the declared shape
    """
    _check_style(style)
    if strict is None:
        strict = config.strict_decoding()
    return _Decoder(style, strict).value(hint, data, "")


class _Decoder:
    """Walks a type hint alongside parsed data."""

    def __init__(self, style: str, strict: bool):
        self.style = style
        self.strict = strict
        self._hints: Dict[type, Dict[str, Any]] = {}

    def value(self, hint: Any, data: Any, path: str) -> Any:
        if hint is Any:
            return data

        origin = getattr(hint, "__origin__", None)
        args = getattr(hint, "__args__", ()) or ()

        if origin is Union:
            inner = [a for a in args if a is not _NoneType]
            if data is None and len(inner) < len(args):
                return None
            if len(inner) != 1:
                raise DecodingError(f"unsupported union type {hint!r}", path)
            return self.value(inner[0], data, path)

        # A null collection stays None (nil) so it re-encodes as null
        if origin in (list, List):
            if data is None:
                return None
            if not isinstance(data, list):
                self._mismatch("array", data, path)
            item_hint = args[0] if args else Any
            return [
                self.value(item_hint, item, _join(path, i))
                for i, item in enumerate(data)
            ]

        if origin in (dict, Dict):
            if data is None:
                return None
            if not isinstance(data, dict):
                self._mismatch("object", data, path)
            item_hint = args[1] if len(args) == 2 else Any
            out = {}
            for key, item in data.items():
                if not isinstance(key, str):
                    raise DecodingError(f"map key {key!r} is not a string", path)
                out[key] = self.value(item_hint, item, _join(path, key))
            return out

        if origin in (tuple, Tuple):
            if not isinstance(data, list):
                self._mismatch("array", data, path)
            if len(data) != len(args):
                raise DecodingError(
                    f"expected {len(args)} elements, got {len(data)}", path
                )
            return tuple(
                self.value(a, item, _join(path, i))
                for i, (a, item) in enumerate(zip(args, data))
            )

        if isinstance(hint, type) and dataclasses.is_dataclass(hint):
            return self.record(hint, data, path)

        return self.scalar(hint, data, path)

    def scalar(self, hint: Any, data: Any, path: str) -> Any:
        if data is None and self.style == YAML and hint in _ZERO_VALUES:
            # An empty YAML value ("key:") is the zero value
            return _ZERO_VALUES[hint]

        if hint is bool:
            if not isinstance(data, bool):
                self._mismatch("boolean", data, path)
            return data

        if hint is int:
            if isinstance(data, bool) or not isinstance(data, int):
                self._mismatch("integer", data, path)
            return data

        if hint is float:
            if isinstance(data, bool) or not isinstance(data, (int, float)):
                self._mismatch("number", data, path)
            return float(data)

        if hint is str:
            if not isinstance(data, str):
                self._mismatch("string", data, path)
            return data

        if hint is datetime:
            # YAML loaders resolve unquoted timestamps themselves
            if isinstance(data, datetime):
                return data if data.tzinfo else data.replace(tzinfo=timezone.utc)
            if not isinstance(data, str):
                self._mismatch("timestamp string", data, path)
            try:
                return parse_time(data)
            except ValueError as e:
                raise DecodingError(str(e), path)

        raise DecodingError(f"unsupported field type {hint!r}", path)

    def record(self, cls: type, data: Any, path: str) -> Any:
        if not isinstance(data, dict):
            self._mismatch(f"object for {cls.__name__}", data, path)

        hints = self._type_hints(cls)
        kwargs = {}
        seen = set()

        for f, meta in wire_fields(cls):
            key = meta.key(self.style)
            if key == SKIP:
                continue
            seen.add(key)
            if key not in data:
                if not meta.omits_empty(self.style):
                    raise DecodingError(
                        f"missing required field {key!r}", _join(path, key)
                    )
                continue
            kwargs[f.name] = self.value(hints[f.name], data[key], _join(path, key))

        unknown = [k for k in data if k not in seen]
        if unknown:
            if self.strict:
                raise DecodingError(
                    f"unknown field(s) for {cls.__name__}: {', '.join(map(str, unknown))}",
                    path or None,
                )
            logger.debug(
                "Ignoring unknown field(s) %s for %s", unknown, cls.__name__
            )

        try:
            return cls(**kwargs)
        except TypeError as e:
            raise DecodingError(str(e), path or None)

    def _type_hints(self, cls: type) -> Dict[str, Any]:
        hints = self._hints.get(cls)
        if hints is None:
            hints = get_type_hints(cls)
            self._hints[cls] = hints
        return hints

    @staticmethod
    def _mismatch(expected: str, data: Any, path: str) -> None:
        got = "null" if data is None else type(data).__name__
        raise DecodingError(f"expected {expected}, got {got}", path or None)


# =============================================================================
# Text helpers
# =============================================================================


def to_json(value: Any, indent: Optional[int] = None) -> str:
    """
    Serialize a value to JSON text.

    Compact separators are used unless indent is given.
    """
    data = encode(value, JSON)
    if indent is None:
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(data, indent=indent, ensure_ascii=False)


def from_json(hint: Any, text: Union[str, bytes], strict: Optional[bool] = None) -> Any:
    """
    Parse JSON text into the given type.

    Raises:
        DecodingError: On malformed JSON or a shape mismatch
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise DecodingError(f"Invalid JSON: {e}")
    return decode(hint, data, JSON, strict=strict)


def to_yaml(value: Any) -> str:
    """Serialize a value to YAML text using YAML field names."""
    return yaml.safe_dump(
        encode(value, YAML), default_flow_style=False, sort_keys=False
    )


def from_yaml(hint: Any, text: Union[str, bytes], strict: Optional[bool] = None) -> Any:
    """
    Parse YAML text into the given type.

    Raises:
        DecodingError: On malformed YAML or a shape mismatch
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise DecodingError(f"Invalid YAML: {e}")
    return decode(hint, data, YAML, strict=strict)


def dumps(value: Any, style: str = JSON, indent: Optional[int] = None) -> str:
    """Serialize a value in the given style."""
    _check_style(style)
    if style == YAML:
        return to_yaml(value)
    return to_json(value, indent=indent)


def loads(
    hint: Any, text: Union[str, bytes], style: str = JSON, strict: Optional[bool] = None
) -> Any:
    """Parse text in the given style into hint."""
    _check_style(style)
    if style == YAML:
        return from_yaml(hint, text, strict=strict)
    return from_json(hint, text, strict=strict)
