"""Split a trainer reply into display text and proposed actions."""

import json
import logging
import re
from typing import Any, List, Optional, Tuple

from fitmatch.exceptions import InvalidActionError
from fitmatch.models.actions import ProposedAction, validate_action

logger = logging.getLogger(__name__)

ACTIONS_BLOCK = re.compile(r"<actions>(.*?)</actions>", re.DOTALL | re.IGNORECASE)
JSON_FENCE = re.compile(r"```json\s*(.*?)```", re.DOTALL | re.IGNORECASE)


def _load_block(body: str) -> Optional[List[Any]]:
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        logger.warning(f"Dropping unparseable action block: {e}")
        return None

    if isinstance(payload, dict):
        return [payload]
    if isinstance(payload, list):
        return payload

    logger.warning(f"Dropping action block of type {type(payload).__name__}")
    return None


def _looks_like_actions(items: List[Any]) -> bool:
    return bool(items) and all(isinstance(item, dict) and "type" in item for item in items)


def parse_reply(text: str) -> Tuple[str, List[ProposedAction]]:
    """
    Extract the action block from a model reply.

    The ``<actions>`` block is preferred. A fenced ```json block is only
    treated as actions when every item carries a ``type`` key; any other
    fenced JSON stays in the reply.

    Args:
        text: Raw model output

    Returns:
        Tuple of (reply text without the block, validated actions)
    """
    match = ACTIONS_BLOCK.search(text)
    items: Optional[List[Any]] = None

    if match:
        items = _load_block(match.group(1).strip())
    else:
        for fence in JSON_FENCE.finditer(text):
            candidate = _load_block(fence.group(1).strip())
            if candidate is not None and _looks_like_actions(candidate):
                match, items = fence, candidate
                break

    if match is None:
        return text.strip(), []

    reply = (text[: match.start()] + text[match.end():]).strip()

    actions: List[ProposedAction] = []
    for raw in items or []:
        try:
            actions.append(validate_action(raw))
        except InvalidActionError as e:
            logger.warning(f"Dropping invalid {e.action_type} action: {e}")

    return reply, actions
