"""Render catalog operations into concrete request templates."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from deliverect_connector.catalog.models import OperationSpec, PayloadField, QueryFlag
from deliverect_connector.errors import InvalidJsonPayload, MissingParameterError
from deliverect_connector.pagination.aggregator import PageRequestTemplate
from deliverect_connector.webhook.verifier import coerce_flag

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

_SKIP = object()


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _compact(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"))


def parse_json_param(value: Any, label: str) -> Any:
    """Decode a JSON-typed parameter; already-decoded values pass through."""
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        raise InvalidJsonPayload(label, str(exc)) from exc


def _render_path(spec: OperationSpec, params: Mapping[str, Any]) -> str:
    def substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        value = params.get(name)
        if _blank(value):
            raise MissingParameterError(spec.value, name)
        return quote(str(value), safe="")

    return _PLACEHOLDER.sub(substitute, spec.path)


def _render_flag(flag: QueryFlag, value: Any) -> Any:
    if flag.mode == "true_if_set":
        return True if value else _SKIP
    if flag.mode == "false_if_false":
        return False if value is False else _SKIP
    return value if value else _SKIP


def _render_field(field: PayloadField, value: Any) -> Any:
    if field.label is None:
        if value is None or (field.optional and value == ""):
            return _SKIP
        return value

    if _blank(value):
        return _SKIP
    label = field.label
    result = parse_json_param(value, label)

    if field.shape == "array":
        if field.optional:
            return result if isinstance(result, list) and result else _SKIP
        if not isinstance(result, list):
            raise InvalidJsonPayload(
                label, "not an array", message=f"{label} payload must be an array",
            )
    elif field.shape == "object":
        if not isinstance(result, dict):
            expected = "a JSON object"
            if field.required_keys:
                expected += f" containing {', '.join(field.required_keys)}"
            raise InvalidJsonPayload(
                label, "not an object", message=f"{label} payload must be {expected}",
            )
        if any(not result.get(key) for key in field.required_keys):
            raise InvalidJsonPayload(
                label,
                "missing required keys",
                message=f"{label} payload must include {' and '.join(field.required_keys)}",
            )
    return result


def _render_body(spec: OperationSpec, params: Mapping[str, Any]) -> Any:
    if not spec.body:
        return None
    body: dict[str, Any] = {}
    for field in spec.body:
        rendered = _render_field(field, params.get(field.param))
        if rendered is _SKIP:
            continue
        if field.key is None:
            return rendered
        body[field.key] = rendered
    return body or None


def render_request(spec: OperationSpec, params: Mapping[str, Any]) -> PageRequestTemplate:
    """Build the request for ``spec`` from user-supplied ``params``.

    Raises ``MissingParameterError`` for absent required parameters and
    ``InvalidJsonPayload`` for malformed JSON-typed parameters.
    """
    for name in spec.required:
        if _blank(params.get(name)):
            raise MissingParameterError(spec.value, name)

    query: dict[str, Any] = {}
    where = {
        key: params[param]
        for key, param in spec.where.items()
        if not _blank(params.get(param))
    }
    if where:
        query["where"] = _compact(where)
    if spec.projection and not coerce_flag(params.get("fetchFullPayload", False)):
        query["projection"] = _compact(spec.projection)
    for flag in spec.query_flags:
        rendered = _render_flag(flag, params.get(flag.param))
        if rendered is not _SKIP:
            query[flag.key] = rendered

    return PageRequestTemplate(
        method=spec.method,
        url=_render_path(spec, params),
        query=query,
        body=_render_body(spec, params),
    )
