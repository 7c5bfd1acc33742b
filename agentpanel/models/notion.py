from typing import Any

from pydantic import ConfigDict, Field, ValidationInfo, field_validator

from agentpanel.models.common import CamelModel, WholeNumber


class ListPagesPayload(CamelModel):
    model_config = ConfigDict(strict=True)

    page_size: WholeNumber = Field(default=10, ge=1, le=20)
    filter_property: str | None = None
    filter_value: str | None = Field(default=None, validate_default=True)

    @field_validator("filter_value")
    @classmethod
    def _value_required_with_property(cls, value: str | None, info: ValidationInfo) -> str | None:
        if info.data.get("filter_property") and not value:
            raise ValueError("filterValue must be provided when filterProperty is set.")
        return value


class CreatePagePayload(CamelModel):
    model_config = ConfigDict(strict=True)

    title: str = Field(min_length=1)
    content: str = Field(min_length=1)


class NotionPage(CamelModel):
    id: str
    url: str
    created_time: str
    last_edited_time: str
    properties: dict[str, Any] = {}


class ListPagesResponse(CamelModel):
    pages: list[NotionPage]


class CreatePageResponse(CamelModel):
    page_id: str
    url: str | None = None
