"""Render a session state as the reply text shown to the user."""
from typing import Optional

from antenna_analyzer.constants import (
    MSG_ANALYZING,
    MSG_ERROR_PREFIX,
    MSG_IMAGE_READY,
    MSG_RESULT_HEADER,
)
from antenna_analyzer.session import Failed, Idle, Loading, Ready, SessionState, Succeeded
from antenna_analyzer.status import classify_status


def render_result(result: str) -> str:
    status = classify_status(result)
    match status:
        case None:
            body = result
        case category:
            body = f"{category.icon} {result}"
    return f"{MSG_RESULT_HEADER}\n{body}"


def render_state(state: SessionState) -> Optional[str]:
    match state:
        case Idle():
            return None
        case Ready():
            return MSG_IMAGE_READY
        case Loading():
            return MSG_ANALYZING
        case Succeeded(result=result):
            return render_result(result)
        case Failed(message=message):
            return MSG_ERROR_PREFIX % message
