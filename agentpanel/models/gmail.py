from pydantic import ConfigDict, EmailStr, Field, field_validator

from agentpanel.models.common import CamelModel, WholeNumber


class ListMessagesPayload(CamelModel):
    model_config = ConfigDict(strict=True)

    max_results: WholeNumber = Field(default=10, ge=1, le=20)
    label_ids: list[str] | None = None
    include_spam_trash: bool | None = None


class SendMessagePayload(CamelModel):
    model_config = ConfigDict(strict=True)

    to: EmailStr
    subject: str = Field(min_length=1)
    body: str = Field(min_length=1)

    @field_validator("subject")
    @classmethod
    def _single_line_subject(cls, value: str) -> str:
        if "\r" in value or "\n" in value:
            raise ValueError("subject must not contain line breaks")
        return value


class GmailMessageSummary(CamelModel):
    id: str
    thread_id: str | None = None
    snippet: str | None = None
    headers: dict[str, str] = {}


class ListMessagesResponse(CamelModel):
    messages: list[GmailMessageSummary]


class SendStatus(CamelModel):
    status: str = "sent"
