"""Builder for the modal collecting a poll question and its options."""

from __future__ import annotations

from typing import Dict, List

from poll_action.interactions import ComponentType, encode

from .constants import DESCRIPTION_FIELD, MODAL_KIND, OPTIONS_FIELD, POLL_NAMESPACE, TEXT_KIND


MODAL_TITLE = "Create a poll"
PARAGRAPH_STYLE = 2
MAX_DESCRIPTION_LENGTH = 256
MAX_OPTIONS_LENGTH = 4000

POLL_MODAL_ID = encode(POLL_NAMESPACE, MODAL_KIND, MODAL_KIND)
DESCRIPTION_INPUT_ID = encode(POLL_NAMESPACE, TEXT_KIND, DESCRIPTION_FIELD)
OPTIONS_INPUT_ID = encode(POLL_NAMESPACE, TEXT_KIND, OPTIONS_FIELD)


def _text_input_row(*, custom_id: str, label: str, placeholder: str, max_length: int) -> Dict:
    return {
        "type": ComponentType.ACTION_ROW.value,
        "components": [
            {
                "type": ComponentType.TEXT_INPUT.value,
                "custom_id": custom_id,
                "label": label,
                "style": PARAGRAPH_STYLE,
                "placeholder": placeholder,
                "required": True,
                "max_length": max_length,
            }
        ],
    }


def build_poll_modal() -> Dict:
    """Build the modal payload opened by the poll slash command."""

    components: List[Dict] = [
        _text_input_row(
            custom_id=DESCRIPTION_INPUT_ID,
            label="Poll Description",
            placeholder="What should we vote on?",
            max_length=MAX_DESCRIPTION_LENGTH,
        ),
        _text_input_row(
            custom_id=OPTIONS_INPUT_ID,
            label="Options for the poll",
            placeholder="One option per line",
            max_length=MAX_OPTIONS_LENGTH,
        ),
    ]
    return {
        "title": MODAL_TITLE,
        "custom_id": POLL_MODAL_ID,
        "components": components,
    }
