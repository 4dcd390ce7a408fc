"""Rails-style nested request parameter parsing.

Flat ``key=value`` pairs from the query string and form body are folded into
nested dicts: ``featured_tag[name]=cats`` becomes
``{"featured_tag": {"name": "cats"}}`` and ``id[]=1&id[]=2`` becomes
``{"id": ["1", "2"]}``. Shape conflicts raise ``InvalidParametersError`` so
the request is answered with 400 before any handler logic runs.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any
from urllib.parse import parse_qsl

from modboard.core.exceptions import InvalidParametersError

_KEY_SEGMENT = re.compile(r"\[([^\[\]]*)\]")


def _split_key(key: str) -> list[str]:
    head, bracket, rest = key.partition("[")
    if not bracket:
        return [key]
    segments = [head]
    tail = "[" + rest
    position = 0
    for match in _KEY_SEGMENT.finditer(tail):
        if match.start() != position:
            raise InvalidParametersError(f"Malformed parameter name: {key}")
        segments.append(match.group(1))
        position = match.end()
    if position != len(tail) or not head:
        raise InvalidParametersError(f"Malformed parameter name: {key}")
    return segments


def parse_params(pairs: Iterable[tuple[str, str]]) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for key, value in pairs:
        segments = _split_key(key)
        node: dict[str, Any] = params
        for depth, segment in enumerate(segments):
            last = depth == len(segments) - 1
            next_is_list = not last and segments[depth + 1] == ""
            if segment == "":
                raise InvalidParametersError(f"Malformed parameter name: {key}")

            if last:
                if isinstance(node.get(segment), (dict, list)):
                    raise InvalidParametersError(f"Conflicting values for parameter: {key}")
                node[segment] = value
                break

            if next_is_list:
                if depth + 1 != len(segments) - 1:
                    raise InvalidParametersError(f"Malformed parameter name: {key}")
                existing = node.setdefault(segment, [])
                if not isinstance(existing, list):
                    raise InvalidParametersError(f"Conflicting values for parameter: {key}")
                existing.append(value)
                break

            child = node.setdefault(segment, {})
            if not isinstance(child, dict):
                raise InvalidParametersError(f"Conflicting values for parameter: {key}")
            node = child
    return params


def parse_query_and_body(query_string: str, body: bytes) -> dict[str, Any]:
    """Merge query string and url-encoded body into one params hash."""
    pairs = parse_qsl(query_string, keep_blank_values=True)
    if body:
        try:
            decoded = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidParametersError("Request body is not valid UTF-8") from exc
        pairs.extend(parse_qsl(decoded, keep_blank_values=True))
    return parse_params(pairs)


def require_params(params: dict[str, Any], key: str) -> dict[str, Any]:
    """Return the nested section under ``key`` or raise for missing or scalar values."""
    section = params.get(key)
    if not isinstance(section, dict) or not section:
        raise InvalidParametersError(f"param is missing or the value is empty: {key}")
    return section


def permit_params(section: dict[str, Any], *fields: str) -> dict[str, str]:
    return {field: section[field] for field in fields if isinstance(section.get(field), str)}
