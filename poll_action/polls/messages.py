"""Message builders for published polls and vote replies."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from poll_action.interactions import ComponentType, encode

from .constants import BUTTON_KIND, POLL_NAMESPACE


SUCCESS_STYLE = 3
BUTTONS_PER_ROW = 5
MAX_OPTIONS = 25
MAX_LABEL_LENGTH = 80
MAX_TITLE_LENGTH = 256


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def _option_button(index: int, label: str) -> Dict[str, Any]:
    return {
        "type": ComponentType.BUTTON.value,
        "style": SUCCESS_STYLE,
        "label": _truncate(label, MAX_LABEL_LENGTH),
        "custom_id": encode(POLL_NAMESPACE, BUTTON_KIND, str(index)),
    }


def build_option_rows(options: Sequence[str]) -> List[Dict[str, Any]]:
    """Lay one button per option out in action rows of at most five."""

    buttons = [_option_button(index, option) for index, option in enumerate(options)]
    return [
        {"type": ComponentType.ACTION_ROW.value, "components": buttons[start : start + BUTTONS_PER_ROW]}
        for start in range(0, len(buttons), BUTTONS_PER_ROW)
    ]


def build_poll_message(*, description: str, options: Sequence[str]) -> Dict[str, Any]:
    """Build the channel message presenting the poll and its vote buttons."""

    embed = {
        "title": _truncate(description, MAX_TITLE_LENGTH),
        "description": "\n".join(options),
    }
    return {
        "embeds": [embed],
        "components": build_option_rows(options),
    }
