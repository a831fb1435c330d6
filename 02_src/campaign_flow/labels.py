"""Deterministic node labels for every action kind."""

from typing import Dict, Optional

from .graph_model import CONTINUATION, START, WaitParams

REQUEST = "request"
MESSAGE = "message"
EMAIL = "email"
PROFILE = "profile"
FOLLOW = "follow"
POST = "post"
WAIT_ACTION = "wait"
END_ACTION = "end"

ACTION_LABELS: Dict[str, str] = {
    REQUEST: "Send Connection Request",
    MESSAGE: "Send Message",
    EMAIL: "InMail",
    PROFILE: "View Profile",
    FOLLOW: "Follow",
    POST: "Like Post",
}

# Order matters: the action menu lists choices in this order.
MENU_ACTIONS = tuple(ACTION_LABELS) + (WAIT_ACTION,)

START_LABEL = "Campaign Start"
END_LABEL = "End"
CONTINUATION_LABEL = "Add next step"

ICONS: Dict[str, str] = {
    START: "📈",
    REQUEST: "🔗",
    MESSAGE: "✉️",
    EMAIL: "📧",
    PROFILE: "👤",
    FOLLOW: "🔗",
    POST: "👍",
    WAIT_ACTION: "🕒",
    END_ACTION: "🏁",
    CONTINUATION: "➕",
}


def wait_label(params: WaitParams) -> str:
    unit = "Days" if params.days > 1 else "Day"
    return f"{params.days} {unit} at {params.time}"


def action_label(action: str, wait: Optional[WaitParams] = None) -> str:
    if action == WAIT_ACTION:
        return wait_label(wait or WaitParams())
    if action == END_ACTION:
        return END_LABEL
    try:
        return ACTION_LABELS[action]
    except KeyError:
        raise ValueError(f"Unknown action kind: {action}") from None


def icon_for(key: str) -> str:
    return ICONS.get(key, "")
