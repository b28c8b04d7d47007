"""Route-ordering service backed by a chat-completion model."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Literal, Optional, Sequence

from ...config import settings
from .gateway import ChatCompletionClient
from .parsing import MalformedReply, is_permutation, parse_route_reply

logger = logging.getLogger(__name__)

MIN_DESTINATIONS = 2
MAX_DESTINATIONS = 10
ROUTE_TEMPERATURE = 0.3

SYSTEM_PROMPT = """You are a delivery route optimization assistant. Your task is to order the destination addresses so that the delivery route is as efficient as possible.

Consider:
1. A logical geographic order
2. Minimizing the total travel distance
3. Avoiding routes that double back

Respond only with JSON using this structure:
{
  "optimizedRoute": ["address1", "address2", "address3", ...]
}"""


class RouteValidationError(ValueError):
    """The destination list cannot be submitted for ordering."""


@dataclass(slots=True)
class RouteOptimization:
    route: list[str]
    outcome: Literal["ordered", "fallback"]
    reason: Optional[str] = None

    @property
    def degraded(self) -> bool:
        return self.outcome == "fallback"


def clean_destinations(entries: Iterable[Optional[str]]) -> list[str]:
    """Drop blank entries; kept addresses are forwarded exactly as given."""
    return [entry for entry in entries if entry and entry.strip()]


def validate_destination_count(destinations: Sequence[str]) -> None:
    if len(destinations) < MIN_DESTINATIONS:
        raise RouteValidationError(f"at least {MIN_DESTINATIONS} destinations required")
    if len(destinations) > MAX_DESTINATIONS:
        raise RouteValidationError(f"at most {MAX_DESTINATIONS} destinations allowed")


def build_messages(destinations: Sequence[str]) -> list[dict]:
    numbered = "\n".join(f"{idx}. {address}" for idx, address in enumerate(destinations, start=1))
    user_prompt = (
        "Optimize the delivery order for the following addresses, "
        "placing addresses that are closest to each other next to each other:\n\n"
        f"{numbered}\n\n"
        "Return the most efficient order in JSON format."
    )
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": user_prompt},
    ]


def optimize_route(
    destinations: Sequence[str],
    client: ChatCompletionClient | None = None,
) -> RouteOptimization:
    """Ask the model for a visiting order of ``destinations``.

    Count violations raise RouteValidationError before any request is made.
    Gateway failures propagate as UpstreamServiceError. A reply that cannot
    be read as a route returns the input order with outcome "fallback".
    """
    validate_destination_count(destinations)
    original = list(destinations)
    logger.info(f"Optimizing route for destinations: {original}")

    client = client or ChatCompletionClient()
    reply = client.complete(build_messages(original), temperature=ROUTE_TEMPERATURE)
    logger.debug(f"Raw route reply: {reply!r}")

    parsed = parse_route_reply(reply, original)
    if isinstance(parsed, MalformedReply):
        logger.warning(f"Failed to parse AI response, using original order: {parsed.reason}")
        return RouteOptimization(route=parsed.route, outcome="fallback", reason=parsed.reason)

    if settings.validate_route_permutation and not is_permutation(parsed.route, original):
        reason = "reply is not a permutation of the input"
        logger.warning(f"Discarding AI route: {reason}")
        return RouteOptimization(route=original, outcome="fallback", reason=reason)

    return RouteOptimization(route=parsed.route, outcome="ordered")
