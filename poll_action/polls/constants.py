"""Custom-id vocabulary shared by the poll modal, messages and handlers."""

POLL_COMMAND_NAME = "poll"
POLL_NAMESPACE = "poll"

MODAL_KIND = "modal"
TEXT_KIND = "text"
BUTTON_KIND = "button"

DESCRIPTION_FIELD = "description"
OPTIONS_FIELD = "options"
