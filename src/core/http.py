"""API Gateway proxy event parsing and JSON responses.

Form bodies follow the conventions browsers and HTTP clients use for nested
data: repeated names and ``name[]`` become lists, bracket paths such as
``itinerary[0][day]`` become nested objects, and JSON arrays or objects sent
for list and object fields are decoded.
"""

import base64
import io
import json
import mimetypes
import re
from collections.abc import Iterable
from typing import Any

from python_multipart import parse_form

from core.errors import ErrorCode, TrailpostError, ValidationError
from core.models.asset import MediaUpload

GENERIC_ERROR = "Something went wrong"

_BRACKETS = re.compile(r"\[([^\]]*)\]")


def get_header(event: dict[str, Any], name: str) -> str | None:
    for key, value in (event.get("headers") or {}).items():
        if key.lower() == name.lower():
            return value
    return None


def read_body(event: dict[str, Any]) -> bytes:
    body = event.get("body") or ""
    if event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except ValueError as e:
            raise ValidationError("Request body is not valid base64", code=ErrorCode.INVALID_REQUEST) from e
    return body.encode("utf-8") if isinstance(body, str) else body


def _split_name(name: str) -> list[str]:
    base = name.split("[", 1)[0]
    return [base, *_BRACKETS.findall(name[len(base) :])]


def _insert(target: dict[str, Any], path: list[str], value: Any) -> None:
    key, rest = path[0], path[1:]
    if not rest:
        if key in target:
            existing = target[key]
            target[key] = (existing if isinstance(existing, list) else [existing]) + [value]
        else:
            target[key] = value
        return

    if rest == [""]:
        current = target.get(key, [])
        target[key] = (current if isinstance(current, list) else [current]) + [value]
        return

    child = target.setdefault(key, {})
    if not isinstance(child, dict):
        raise ValidationError(f"Conflicting form field '{key}'", code=ErrorCode.INVALID_REQUEST)
    _insert(child, rest, value)


def _listify(value: Any) -> Any:
    """Turn objects keyed only by indexes back into lists."""
    if isinstance(value, dict):
        converted = {key: _listify(item) for key, item in value.items()}
        if converted and all(key.isdigit() for key in converted):
            return [converted[key] for key in sorted(converted, key=int)]
        return converted
    if isinstance(value, list):
        return [_listify(item) for item in value]
    return value


def _decode_value(text: str) -> Any:
    if text.lstrip()[:1] in ("[", "{"):
        try:
            return json.loads(text)
        except ValueError:
            return text
    return text


def build_form(pairs: Iterable[tuple[str, str]], json_fields: Iterable[str] = ()) -> dict[str, Any]:
    """Assemble form pairs; only ``json_fields`` values are decoded as JSON."""
    json_fields = set(json_fields)
    form: dict[str, Any] = {}
    for name, value in pairs:
        path = _split_name(name)
        _insert(form, path, _decode_value(value) if path[0] in json_fields else value)
    return _listify(form)


def _parse_multipart(
    body: bytes,
    content_type: str,
    file_fields: set[str],
    json_fields: set[str],
) -> tuple[dict[str, Any], dict[str, MediaUpload]]:
    pairs: list[tuple[str, str]] = []
    media: dict[str, MediaUpload] = {}

    def on_field(field: Any) -> None:
        if field.field_name is None:
            return
        value = field.value or b""
        pairs.append((field.field_name.decode("utf-8"), value.decode("utf-8")))

    def on_file(file: Any) -> None:
        name = file.field_name.decode("utf-8") if file.field_name else ""
        if name not in file_fields or name in media:
            return
        filename = file.file_name.decode("utf-8") if file.file_name else ""
        file.file_object.seek(0)
        content = file.file_object.read()
        if not filename or not content:
            return
        media[name] = MediaUpload(
            slot=name,
            filename=filename,
            content=content,
            content_type=mimetypes.guess_type(filename)[0] or "application/octet-stream",
        )

    headers = {"Content-Type": content_type, "Content-Length": str(len(body))}
    try:
        parse_form(headers, io.BytesIO(body), on_field, on_file)
    except ValueError as e:
        raise ValidationError(f"Malformed form body: {e}", code=ErrorCode.INVALID_REQUEST) from e
    return build_form(pairs, json_fields), media


def parse_request(
    event: dict[str, Any],
    file_fields: Iterable[str] = (),
    json_fields: Iterable[str] = (),
) -> tuple[dict[str, Any], dict[str, MediaUpload]]:
    """Return the form fields and the media uploads carried by an event."""
    body = read_body(event)
    if not body:
        return {}, {}

    content_type = get_header(event, "Content-Type") or ""
    if content_type.split(";", 1)[0].strip().lower() == "application/json":
        try:
            form = json.loads(body)
        except ValueError as e:
            raise ValidationError("Request body is not valid JSON", code=ErrorCode.INVALID_REQUEST) from e
        if not isinstance(form, dict):
            raise ValidationError("Request body must be a JSON object", code=ErrorCode.INVALID_REQUEST)
        return form, {}

    if not content_type:
        raise ValidationError("Missing Content-Type header", code=ErrorCode.INVALID_REQUEST)
    return _parse_multipart(body, content_type, set(file_fields), set(json_fields))


def json_response(status_code: int, body: dict[str, Any]) -> dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(body),
    }


def error_response(error: TrailpostError, development: bool = False) -> dict[str, Any]:
    """Render an error body; internal detail is only exposed in development."""
    if error.status_code >= 500:
        body: dict[str, Any] = {
            "message": error.user_message,
            "error": error.message if development else GENERIC_ERROR,
        }
    else:
        body = {"message": error.message}
    body.update(error.details)
    return json_response(error.status_code, body)
