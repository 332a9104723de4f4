"""Deterministic text generator that replays canned replies."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable


class StaticTextGenerator:
    """Returns queued replies in order and records every prompt it receives.

    When a single reply is given it is returned for every call. An exception
    instance in the queue is raised instead of returned.
    """

    def __init__(self, replies: str | Iterable[str | BaseException]):
        if isinstance(replies, str):
            self._replies: deque = deque()
            self._fixed: str | None = replies
        else:
            self._replies = deque(replies)
            self._fixed = None
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self._fixed is not None:
            return self._fixed
        if not self._replies:
            raise RuntimeError("StaticTextGenerator has no replies left")
        reply = self._replies.popleft()
        if isinstance(reply, BaseException):
            raise reply
        return reply

    @property
    def last_prompt(self) -> str | None:
        return self.prompts[-1] if self.prompts else None
