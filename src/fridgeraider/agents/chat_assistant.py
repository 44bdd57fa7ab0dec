"""Chat assistant agent.

Two ways to ask: :meth:`ChatAssistant.reply` returns the whole answer in one go,
:meth:`ChatAssistant.stream` yields the answer as it is produced. A streamed
answer is a finite sequence of :class:`ChatChunk` events, each carrying the
cumulative text so far, terminated by exactly one :class:`ChatComplete` that
carries the citations. Grounding metadata may ride on any chunk of the model's
stream; the most recent one seen wins.
"""

from __future__ import annotations

import logging
from time import perf_counter
from typing import AsyncIterator, Awaitable, Callable, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

from fridgeraider import metrics
from fridgeraider.agents.base import ModelAgent
from fridgeraider.errors import GenerationError
from fridgeraider.llm import prompts
from fridgeraider.llm.interface import GenerationRequest, ModelTier
from fridgeraider.models.chat import ChatChunk, ChatComplete, ChatEvent, ChatReply, Citation
from fridgeraider.models.inventory import InventoryItem
from fridgeraider.models.preferences import UserPreferences

logger = logging.getLogger(__name__)

ERROR_MESSAGE = "I'm sorry, I encountered an error processing your request."
EMPTY_MESSAGE = "I couldn't get a response. Please try again."

ChunkCallback = Callable[[str], Union[None, Awaitable[None]]]
CompleteCallback = Callable[[list[Citation]], Union[None, Awaitable[None]]]


class ChatQuestion(BaseModel):
    """User message plus the kitchen context it is asked against."""

    message: str = Field(min_length=1)
    inventory: list[InventoryItem] = Field(default_factory=list)
    preferences: Optional[UserPreferences] = None

    model_config = ConfigDict(frozen=True)


class ChatAssistant(ModelAgent[ChatQuestion, ChatReply]):
    """Answer free-form questions with the inventory as context and web search enabled."""

    operation = "chat"

    async def run(self, payload: ChatQuestion) -> ChatReply:
        return await self.reply(payload.message, payload.inventory, payload.preferences)

    def _request(
        self,
        message: str,
        inventory: Sequence[InventoryItem],
        preferences: Optional[UserPreferences],
    ) -> GenerationRequest:
        return GenerationRequest(
            operation=self.operation,
            prompt=prompts.chat_prompt(message, inventory, preferences),
            tier=ModelTier.FAST,
            search=True,
        )

    async def reply(
        self,
        message: str,
        inventory: Sequence[InventoryItem],
        preferences: Optional[UserPreferences] = None,
    ) -> ChatReply:
        """Return the full answer; never raises."""

        try:
            result = await self._call(self._request(message, inventory, preferences))
        except GenerationError as exc:
            self._recovered(exc)
            return ChatReply(text=ERROR_MESSAGE, links=[])

        return ChatReply(text=result.text or EMPTY_MESSAGE, links=result.citations or [])

    async def stream(
        self,
        message: str,
        inventory: Sequence[InventoryItem],
        preferences: Optional[UserPreferences] = None,
    ) -> AsyncIterator[ChatEvent]:
        """Yield cumulative-text chunks followed by one completion event.

        On failure the apology text is pushed as a chunk and the stream completes
        with no links; nothing is retried.
        """

        request = self._request(message, inventory, preferences)
        text = ""
        links: list[Citation] = []
        start = perf_counter()
        try:
            async for fragment in self._model.stream(request):
                if fragment.citations is not None:
                    links = list(fragment.citations)
                if fragment.text:
                    text += fragment.text
                    yield ChatChunk(text=text)
        except Exception as exc:
            metrics.AI_CALLS.labels(operation=self.operation, outcome="error").inc()
            self._recovered(exc)
            yield ChatChunk(text=ERROR_MESSAGE)
            yield ChatComplete(links=[])
            return
        finally:
            metrics.AI_LATENCY.labels(operation=self.operation).observe(perf_counter() - start)

        metrics.AI_CALLS.labels(operation=self.operation, outcome="ok").inc()
        if not text:
            yield ChatChunk(text=EMPTY_MESSAGE)
        yield ChatComplete(links=links)

    async def stream_with_callbacks(
        self,
        message: str,
        inventory: Sequence[InventoryItem],
        on_chunk: ChunkCallback,
        on_complete: CompleteCallback,
        preferences: Optional[UserPreferences] = None,
    ) -> None:
        """Drive :meth:`stream`, calling ``on_chunk`` per chunk and ``on_complete`` once."""

        async for event in self.stream(message, inventory, preferences):
            if isinstance(event, ChatChunk):
                outcome = on_chunk(event.text)
            else:
                outcome = on_complete(list(event.links))
            if outcome is not None:
                await outcome


__all__ = [
    "ChatAssistant",
    "ChatQuestion",
    "ERROR_MESSAGE",
    "EMPTY_MESSAGE",
]
