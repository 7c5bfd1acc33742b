from enum import Enum
from typing import Any

from pydantic import BaseModel


class AgentAction(str, Enum):
    LIST_MESSAGES = "gmail.listMessages"
    SEND_MESSAGE = "gmail.sendMessage"
    LIST_PAGES = "notion.listPages"
    CREATE_PAGE = "notion.createPage"


class AgentRequest(BaseModel):
    action: AgentAction
    payload: dict[str, Any] | None = None
