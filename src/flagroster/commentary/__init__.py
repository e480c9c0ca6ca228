"""AI coach commentary client."""

from .service import (
    FALLBACK_EMPTY_RESPONSE,
    FALLBACK_NOT_CONFIGURED,
    FALLBACK_SERVICE_ERROR,
    CommentaryService,
    CommentaryUpdate,
    ModelFactory,
    build_prompt,
    gemini_model,
)

__all__ = [
    "FALLBACK_EMPTY_RESPONSE",
    "FALLBACK_NOT_CONFIGURED",
    "FALLBACK_SERVICE_ERROR",
    "CommentaryService",
    "CommentaryUpdate",
    "ModelFactory",
    "build_prompt",
    "gemini_model",
]
