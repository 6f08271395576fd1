"""Single-turn chat over the configured Gemini text model."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - type hints only
    from dashboard.clients.gemini import GeminiClient


class ChatService:
    """Forward one message to the model and return its reply; no history is kept."""

    def __init__(self, gemini: "GeminiClient") -> None:
        self._gemini = gemini

    async def reply(self, message: str) -> str:
        return await asyncio.to_thread(self._gemini.generate_text, message)


__all__ = ["ChatService"]
