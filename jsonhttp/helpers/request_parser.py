"""Decode size-bounded JSON request bodies into caller-owned targets."""

import dataclasses
import io
import json
import typing

from pydantic import TypeAdapter, ValidationError
from pydantic.errors import PydanticSchemaGenerationError
from werkzeug.exceptions import ClientDisconnected

from jsonhttp.errors import (
    ContractViolationError,
    MalformedPayloadError,
    RequestBodyTooLargeError,
    TransportReadError,
)
from jsonhttp.utils.logger import get_logger

MAX_POST_SIZE = 1_000_000  # 1 MB

READ_CHUNK_SIZE = 64 * 1024


def _is_dataclass_instance(value):
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _read_limited(stream, limit):
    """Copy at most ``limit`` bytes from ``stream`` into memory."""
    buffer = io.BytesIO()
    remaining = limit
    while remaining > 0:
        chunk = stream.read(min(READ_CHUNK_SIZE, remaining))
        if not chunk:
            break
        buffer.write(chunk)
        remaining -= len(chunk)
    return buffer.getvalue()


def _field_plan(target):
    """Map each field of a dataclass target to its validator.

    Fields currently holding a dataclass instance get a nested plan so the
    instance can be filled in place. Built before the body is read, so a
    target whose annotations cannot be resolved fails as a contract violation.
    """
    name = type(target).__name__
    try:
        hints = typing.get_type_hints(type(target))
    except (NameError, TypeError) as e:
        raise ContractViolationError(f"Cannot resolve field types of {name}: {e}") from e

    plan = {}
    for field in dataclasses.fields(target):
        current = getattr(target, field.name)
        nested = _field_plan(current) if _is_dataclass_instance(current) else None
        try:
            adapter = TypeAdapter(hints[field.name])
        except PydanticSchemaGenerationError as e:
            raise ContractViolationError(
                f"Cannot validate field {field.name!r} of {name}: {e}"
            ) from e
        plan[field.name] = (adapter, nested)
    return plan


def _dataclass_updates(target, plan, decoded, path=""):
    """Validate ``decoded`` against ``plan`` and return the assignments to make."""
    if not isinstance(decoded, dict):
        where = f" at {path!r}" if path else ""
        raise MalformedPayloadError(
            f"Bad request, expected a JSON object for {type(target).__name__}{where}"
        )

    updates = []
    for name, (adapter, nested) in plan.items():
        value = decoded.get(name)
        # Missing keys and null leave the existing value in place
        if value is None:
            continue
        field_path = f"{path}.{name}" if path else name
        if nested is not None and isinstance(value, dict):
            updates.extend(_dataclass_updates(getattr(target, name), nested, value, field_path))
            continue
        try:
            # Strict JSON validation: no string-to-number or bool-to-int coercion
            validated = adapter.validate_json(json.dumps(value), strict=True)
        except ValidationError as e:
            raise MalformedPayloadError(
                f"Bad request, field {field_path!r}: {e.errors()[0]['msg']}"
            ) from e
        updates.append((target, name, validated))
    return updates


def _fill(target, decoded, plan=None):
    if target is None:
        return decoded

    if isinstance(target, dict):
        if not isinstance(decoded, dict):
            raise MalformedPayloadError("Bad request, expected a JSON object")
        target.update(decoded)
    elif isinstance(target, list):
        if not isinstance(decoded, list):
            raise MalformedPayloadError("Bad request, expected a JSON array")
        target[:] = decoded
    else:
        # Every field is validated before any is assigned
        for owner, name, value in _dataclass_updates(target, plan, decoded):
            setattr(owner, name, value)

    return target


def decode_data(request, target=None, max_size=MAX_POST_SIZE, logger=None):
    """Read the JSON body of ``request`` into ``target`` and return it.

    ``request`` needs a ``content_length`` (int or None) and a readable
    ``stream``; a Flask request has both. ``target`` may be a dict, a list,
    a dataclass instance or None, in which case the decoded value itself is
    returned. Dataclass fields are checked against their annotations with
    pydantic before any is assigned, and nested dataclass instances are
    filled in place.

    Raises RequestBodyTooLargeError when the declared length or the bytes
    actually read exceed ``max_size``, TransportReadError when the body
    cannot be read, and MalformedPayloadError when it is not JSON of the
    target's shape.
    """
    logger = logger or get_logger()

    if not (target is None or isinstance(target, (dict, list)) or _is_dataclass_instance(target)):
        msg = f"Cannot decode into target of type {type(target).__name__}"
        logger.error(msg)
        raise ContractViolationError(msg)

    plan = None
    if _is_dataclass_instance(target):
        try:
            plan = _field_plan(target)
        except ContractViolationError as e:
            logger.error(str(e))
            raise

    declared = getattr(request, "content_length", None)
    if declared is not None and declared > max_size:
        logger.warning(f"Rejected request body, declared length {declared} exceeds {max_size}")
        raise RequestBodyTooLargeError()

    # One byte past the limit tells an oversized body apart from one exactly at it
    try:
        body = _read_limited(request.stream, max_size + 1)
    except (OSError, ClientDisconnected) as e:
        msg = f"Could not read body {e}"
        logger.warning(msg)
        raise TransportReadError(msg) from e

    if len(body) > max_size:
        logger.warning(f"Rejected request body, more than {max_size} bytes read")
        raise RequestBodyTooLargeError()

    try:
        decoded = json.loads(body)
    except ValueError as e:
        msg = f"Bad request {e}"
        logger.warning(msg)
        raise MalformedPayloadError(msg) from e

    try:
        result = _fill(target, decoded, plan)
    except MalformedPayloadError as e:
        logger.warning(str(e))
        raise

    logger.debug(f"Decoded {len(body)} byte request body")
    return result
