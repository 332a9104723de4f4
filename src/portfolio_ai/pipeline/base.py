"""Shared call -> parse step for the generation agents."""

from __future__ import annotations

import logging

from portfolio_ai.clients.llm_client import TextGenerator
from portfolio_ai.errors import GenerationError, GenerationProviderError
from portfolio_ai.utils.json_parser import parse_json_reply, strip_code_fences

logger = logging.getLogger(__name__)


class StructuredGenerator:
    """Base for agents that send one prompt and read one reply."""

    #: used in provider error messages, e.g. "Failed to generate resume content"
    task: str = "content"

    def __init__(self, llm: TextGenerator):
        self.llm = llm

    async def _complete(self, prompt: str) -> str:
        logger.debug("Requesting %s (%d chars of prompt)", self.task, len(prompt))
        try:
            return await self.llm.complete(prompt)
        except GenerationError:
            raise
        except Exception as exc:
            logger.error("Provider call for %s failed", self.task, exc_info=True)
            raise GenerationProviderError(f"Failed to generate {self.task}", exc) from exc

    async def _complete_json(self, prompt: str) -> dict | list:
        reply = await self._complete(prompt)
        return parse_json_reply(reply)

    async def _complete_text(self, prompt: str) -> str:
        reply = await self._complete(prompt)
        return strip_code_fences(reply or "")
