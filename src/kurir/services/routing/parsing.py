"""Extraction of an ordered route from free-text model replies."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Sequence, Union

# First "{" through the last "}" so JSON wrapped in prose still matches.
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)

ROUTE_KEYS = ("optimizedRoute", "route")


@dataclass(frozen=True, slots=True)
class OrderedRoute:
    route: list[str]


@dataclass(frozen=True, slots=True)
class MalformedReply:
    reason: str
    route: list[str]


RouteReply = Union[OrderedRoute, MalformedReply]


def parse_route_reply(text: str, original: Sequence[str]) -> RouteReply:
    """Pull the route list out of a model reply.

    ``optimizedRoute`` wins over ``route``. Anything unusable yields a
    MalformedReply carrying the original order unchanged.
    """
    fallback = list(original)
    match = _JSON_OBJECT.search(text or "")
    if not match:
        return MalformedReply("no JSON object in reply", fallback)

    try:
        parsed = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        return MalformedReply(f"invalid JSON: {exc}", fallback)
    if not isinstance(parsed, dict):
        return MalformedReply("reply JSON is not an object", fallback)

    for key in ROUTE_KEYS:
        value = parsed.get(key)
        if value is None:
            continue
        if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
            return MalformedReply(f"'{key}' is not a list of strings", fallback)
        return OrderedRoute(list(value))

    return MalformedReply("reply has neither 'optimizedRoute' nor 'route'", fallback)


def is_permutation(candidate: Sequence[str], original: Sequence[str]) -> bool:
    return sorted(candidate) == sorted(original)
