"""Archived message metadata model.

One ``MessageRecord`` is written per message and never updated afterwards.
Field names on disk follow the Gmail API (``threadId``, ``labelIds``) so an
archived file reads like the API response it was taken from.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MessageHeader(BaseModel):
    """A single RFC 822 header as returned by Gmail."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Header name, e.g. From")
    value: str = Field(default="", description="Raw header value")


class MessageRecord(BaseModel):
    """Envelope fields and allow-listed headers of one Gmail message."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(description="Gmail message ID")
    thread_id: str | None = Field(default=None, alias="threadId", description="Gmail thread ID")
    label_ids: list[str] = Field(
        default_factory=list, alias="labelIds", description="Gmail label IDs"
    )
    snippet: str = Field(default="", description="Short plain-text excerpt")
    headers: list[MessageHeader] = Field(
        default_factory=list, description="Headers in the order Gmail returned them"
    )

    def to_json(self) -> str:
        """Serialize as pretty-printed JSON using the Gmail field names."""

        return self.model_dump_json(by_alias=True, indent=2)
