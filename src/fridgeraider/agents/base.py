"""Common agent interfaces."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from time import perf_counter
from typing import Generic, TypeVar

from fridgeraider import metrics
from fridgeraider.errors import GenerationError
from fridgeraider.llm.interface import GenerationRequest, GenerationResult, GenerativeModel

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")

logger = logging.getLogger(__name__)


class Agent(ABC, Generic[InputT, OutputT]):
    """Base agent interface implemented by all FridgeRaider agents."""

    @abstractmethod
    async def run(self, payload: InputT) -> OutputT:
        """Execute the agent with the given payload."""


class ModelAgent(Agent[InputT, OutputT]):
    """Agent that answers through a single generative model call."""

    operation = "generate"

    def __init__(self, model: GenerativeModel) -> None:
        self._model = model

    async def _call(self, request: GenerationRequest) -> GenerationResult:
        """Issue ``request``, recording latency and outcome.

        Any backend failure surfaces as GenerationError.
        """

        start = perf_counter()
        try:
            result = await self._model.generate(request)
        except GenerationError:
            metrics.AI_CALLS.labels(operation=self.operation, outcome="error").inc()
            raise
        except Exception as exc:
            metrics.AI_CALLS.labels(operation=self.operation, outcome="error").inc()
            raise GenerationError(f"{self.operation}: model call failed: {exc}") from exc
        finally:
            metrics.AI_LATENCY.labels(operation=self.operation).observe(perf_counter() - start)
        metrics.AI_CALLS.labels(operation=self.operation, outcome="ok").inc()
        return result

    def _recovered(self, exc: Exception) -> None:
        logger.warning(
            "%s failed, using fallback: %s",
            self.operation,
            exc,
            extra={"operation": self.operation},
        )


__all__ = ["Agent", "ModelAgent"]
