"""Reading and writing ``.jfxr`` files.

A ``.jfxr`` file is a single JSON object: ``_version`` (int), ``_name``
(str), ``_locked`` (list of locked parameter keys, an editor concern that is
ignored on load) and one camelCase key per Sound parameter.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import (
    InvalidFieldError,
    JsonSyntaxError,
    MissingFieldError,
    NotAnObjectError,
    UnsupportedVersionError,
)
from .sound import Sound

_LOGGER = logging.getLogger("jfxr.fileformat")

VERSION = 1
FILE_SUFFIX = ".jfxr"

_VERSION_KEY = "_version"
_LOCKED_KEY = "_locked"


def _field_keys() -> tuple[str, ...]:
    return tuple(field.alias or name for name, field in Sound.model_fields.items())


_FIELD_KEYS = _field_keys()


def _check_version(payload: Mapping[str, Any]) -> int:
    if _VERSION_KEY not in payload:
        raise MissingFieldError(_VERSION_KEY)
    version = payload[_VERSION_KEY]
    # bool is an int subclass; JSON true/false is not a version.
    if isinstance(version, bool) or not isinstance(version, int):
        raise InvalidFieldError(_VERSION_KEY, f"expected an integer, got {version!r}")
    if version < 0:
        raise InvalidFieldError(_VERSION_KEY, f"expected a non-negative integer, got {version}")
    if version > VERSION:
        raise UnsupportedVersionError(version, VERSION)
    return version


def sound_from_payload(payload: object) -> Sound:
    """Validate an already-decoded JSON value as a sound."""
    if not isinstance(payload, dict):
        raise NotAnObjectError()
    _check_version(payload)

    fields: dict[str, Any] = {}
    for key in _FIELD_KEYS:
        if key not in payload:
            raise MissingFieldError(key)
        fields[key] = payload[key]

    try:
        return Sound.model_validate(fields, strict=True)
    except ValidationError as exc:
        error = exc.errors()[0]
        loc = error.get("loc") or ("?",)
        field = str(loc[0])
        _LOGGER.debug("Rejected jfxr field %s: %s", field, exc)
        raise InvalidFieldError(field, error.get("msg")) from exc


def read_jfxr(text: str | bytes) -> Sound:
    """Parse the contents of a ``.jfxr`` file."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise JsonSyntaxError(f"Invalid JSON: {exc}") from exc
    sound = sound_from_payload(payload)
    ignored = set(payload) - set(_FIELD_KEYS) - {_VERSION_KEY, _LOCKED_KEY}
    if ignored:
        _LOGGER.debug("Ignoring unknown jfxr keys: %s", sorted(ignored))
    return sound


def sound_to_payload(sound: Sound) -> dict[str, Any]:
    payload: dict[str, Any] = {_VERSION_KEY: VERSION}
    payload.update(sound.to_dict(by_alias=True))
    payload[_LOCKED_KEY] = []
    return payload


def write_jfxr(sound: Sound) -> str:
    """Serialize ``sound`` to ``.jfxr`` text."""
    return json.dumps(sound_to_payload(sound))


def load_jfxr(path: str | Path) -> Sound:
    source = Path(path)
    _LOGGER.info("Loading sound from %s", source)
    return read_jfxr(source.read_text(encoding="utf-8"))


def save_jfxr(sound: Sound, path: str | Path) -> Path:
    target = Path(path)
    target.write_text(write_jfxr(sound), encoding="utf-8")
    _LOGGER.info("Saved sound %r to %s", sound.name, target)
    return target
