"""Chat assistant models."""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Citation(BaseModel):
    """Web source the model consulted while answering."""

    title: str = Field(default="")
    uri: str

    model_config = ConfigDict(frozen=True)


class ChatMessage(BaseModel):
    """Single entry in the chat transcript."""

    role: Literal["user", "assistant"]
    content: str = Field(default="")
    links: list[Citation] = Field(default_factory=list)
    is_streaming: bool = Field(default=False)


class ChatReply(BaseModel):
    """Whole-response chat answer."""

    text: str
    links: list[Citation] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class ChatChunk(BaseModel):
    """Cumulative text produced so far by a streamed answer."""

    kind: Literal["chunk"] = "chunk"
    text: str

    model_config = ConfigDict(frozen=True)


class ChatComplete(BaseModel):
    """Terminal event of a streamed answer carrying the final citations."""

    kind: Literal["complete"] = "complete"
    links: list[Citation] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


ChatEvent = Union[ChatChunk, ChatComplete]
