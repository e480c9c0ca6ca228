"""Coach-style commentary generated with Gemini."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

import google.generativeai as genai

from flagroster.config_loader import Settings
from flagroster.metrics import stat_summary_line
from flagroster.models import Player


logger = logging.getLogger(__name__)

FALLBACK_NOT_CONFIGURED = "Set an API key to enable AI coach commentary."
FALLBACK_SERVICE_ERROR = "The AI coach is taking a break. Please try again later."
FALLBACK_EMPTY_RESPONSE = "AI commentary is temporarily unavailable."

SYSTEM_INSTRUCTION = (
    "You are a senior flag football coach. Using the player's numbers below "
    "(they may cover more than one position), write a short, sharp and "
    "encouraging review. Keep a professional, sports-tech tone: point out "
    "strengths per position from the standout numbers and concrete areas to "
    "improve from the weak ones. Reply in Markdown, emoji allowed, under 200 words."
)

ModelFactory = Callable[[Settings], Any]


@dataclass(frozen=True)
class CommentaryUpdate:
    """Result of a commentary request, addressed to the player it was asked for."""

    player_id: str
    text: str


def gemini_model(settings: Settings) -> Any:
    """Configure the SDK for this process and build the coach model."""

    options = {"api_endpoint": settings.genai_endpoint} if settings.genai_endpoint else None
    genai.configure(api_key=settings.genai_api_key, client_options=options)
    return genai.GenerativeModel(settings.genai_model, system_instruction=SYSTEM_INSTRUCTION)


def build_prompt(player: Player) -> str:
    lines = [
        f"Player: {player.name} (#{player.number})",
        f"Age group: {player.age_group.value}",
    ]
    for role in player.roles:
        line = player.stats.get(role)
        if line is None:
            continue
        lines.append(stat_summary_line(role, line))
    lines.append("")
    lines.append("Review this player based on the combined numbers above.")
    return "\n".join(lines)


def _extract_text(response: Any) -> str:
    # ``response.text`` raises ValueError when the reply has no usable part.
    try:
        text = response.text
    except (AttributeError, ValueError):
        text = None
    if isinstance(text, str) and text.strip():
        return text.strip()
    chunks = []
    for candidate in getattr(response, "candidates", None) or ():
        content = getattr(candidate, "content", None)
        for part in getattr(content, "parts", None) or ():
            value = getattr(part, "text", None)
            if isinstance(value, str) and value:
                chunks.append(value)
        if chunks:
            break
    return "\n".join(chunks).strip()


class CommentaryService:
    def __init__(self, settings: Settings, *, model_factory: ModelFactory = gemini_model):
        self.settings = settings
        self._model_factory = model_factory
        self._model: Any = None

    @property
    def configured(self) -> bool:
        return bool(self.settings.genai_api_key)

    def _coach_model(self) -> Any:
        if self._model is None:
            self._model = self._model_factory(self.settings)
        return self._model

    async def generate(self, player: Player) -> str:
        """Commentary text for ``player``; one of the fallback strings on any failure."""

        if not self.configured:
            return FALLBACK_NOT_CONFIGURED
        try:
            response = await self._coach_model().generate_content_async(
                build_prompt(player),
                request_options={"timeout": self.settings.genai_timeout},
            )
        except Exception as exc:
            logger.warning("Commentary request for %s failed: %s", player.player_id, exc, exc_info=True)
            return FALLBACK_SERVICE_ERROR
        text = _extract_text(response)
        if not text:
            logger.warning("Commentary response for %s carried no text", player.player_id)
            return FALLBACK_EMPTY_RESPONSE
        return text

    async def commentary_for(self, player: Player) -> CommentaryUpdate:
        text = await self.generate(player)
        logger.info("Commentary ready for %s (%d chars)", player.player_id, len(text))
        return CommentaryUpdate(player_id=player.player_id, text=text)
