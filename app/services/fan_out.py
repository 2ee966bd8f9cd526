"""
Fan-Out Executor
Issues the same generation request several times concurrently.
"""

import asyncio
import logging
from typing import Callable, List, Optional, Protocol

from app.core.errors import FailureKind
from app.models.generation import GenerationOutcome, GenerationRequest, ProviderResponse
from app.services.response_reducer import reduce_response

logger = logging.getLogger(__name__)


class ImageProvider(Protocol):
    """What the pipeline needs from a generation backend."""

    def check_configured(self) -> None: ...

    async def generate(self, request: GenerationRequest) -> ProviderResponse: ...


Reducer = Callable[[ProviderResponse, int], GenerationOutcome]


class FanOutExecutor:
    """
    Runs ``count`` independent provider calls and returns one outcome per call.

    Outcomes are placed by call index, not by arrival, so ``outcomes[i]``
    always belongs to the i-th call issued. Failed calls are recorded as
    failure outcomes; nothing is retried or dropped.
    """

    def __init__(self, provider: ImageProvider, count: int = 4, reducer: Optional[Reducer] = None):
        if count < 1:
            raise ValueError("Fan-out count must be at least 1")
        self.provider = provider
        self.count = count
        self.reducer = reducer or reduce_response

    async def _call(self, index: int, request: GenerationRequest) -> GenerationOutcome:
        try:
            response = await self.provider.generate(request)
            outcome = self.reducer(response, index)
        except asyncio.TimeoutError:
            logger.warning(f"[FanOut] Call {index + 1}/{self.count} timed out")
            return GenerationOutcome.failed(index, FailureKind.TRANSPORT, "Generation request timed out")
        except Exception as e:
            logger.warning(f"[FanOut] Call {index + 1}/{self.count} failed: {e}")
            return GenerationOutcome.failed(index, FailureKind.TRANSPORT, str(e) or type(e).__name__)

        if outcome.ok:
            logger.info(f"[FanOut] Call {index + 1}/{self.count} returned an image ({outcome.mime_type})")
        else:
            logger.warning(f"[FanOut] Call {index + 1}/{self.count}: {outcome.failure.message}")
        return outcome

    async def run(self, request: GenerationRequest) -> List[GenerationOutcome]:
        """Issue all calls at once and wait for every one of them."""
        logger.info(f"[FanOut] Issuing {self.count} concurrent generation calls")
        tasks = [asyncio.ensure_future(self._call(i, request)) for i in range(self.count)]

        arena: List[Optional[GenerationOutcome]] = [None] * self.count
        for finished in asyncio.as_completed(tasks):
            outcome = await finished
            arena[outcome.index] = outcome
        return arena
