from types import SimpleNamespace

import pytest
from google.api_core import exceptions as google_exceptions

from flagroster.commentary import (
    FALLBACK_EMPTY_RESPONSE,
    FALLBACK_NOT_CONFIGURED,
    FALLBACK_SERVICE_ERROR,
    CommentaryService,
    build_prompt,
    gemini_model,
)
from flagroster.commentary import service as commentary_service
from flagroster.config_loader import Settings
from flagroster.seed import default_seed_players


def _settings(tmp_path, api_key="test-key", **overrides) -> Settings:
    return Settings(db_path=tmp_path / "unused.sqlite", genai_api_key=api_key, **overrides)


class FakeModel:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    async def generate_content_async(self, prompt, **kwargs):
        self.calls.append((prompt, kwargs))
        if self.error is not None:
            raise self.error
        return self.reply


class _BlockedReply:
    """Mirrors the SDK response whose ``text`` accessor refuses multi-part replies."""

    def __init__(self, *chunks):
        parts = [SimpleNamespace(text=chunk) for chunk in chunks]
        self.candidates = [SimpleNamespace(content=SimpleNamespace(parts=parts))]

    @property
    def text(self):
        raise ValueError("The `response.text` quick accessor only works for simple responses")


def _service(tmp_path, model, **settings) -> CommentaryService:
    return CommentaryService(_settings(tmp_path, **settings), model_factory=lambda _settings: model)


def test_prompt_covers_every_held_role():
    leo = default_seed_players()[0]
    prompt = build_prompt(leo)

    assert "Player: Leo Carter (#12)" in prompt
    assert "Age group: U12" in prompt
    assert "[QB] passing 98/150 (65.3%)" in prompt
    assert "[S] flag pulls 12/15 (80.0%)" in prompt


@pytest.mark.anyio
async def test_generate_returns_model_text(tmp_path):
    model = FakeModel(reply=SimpleNamespace(text="  Great season!  "))
    service = _service(tmp_path, model, genai_timeout=7.5)

    update = await service.commentary_for(default_seed_players()[1])

    assert update.player_id == "2"
    assert update.text == "Great season!"
    prompt, kwargs = model.calls[0]
    assert "Maya Brooks" in prompt
    assert kwargs["request_options"] == {"timeout": 7.5}


@pytest.mark.anyio
async def test_model_is_built_once(tmp_path):
    built = []

    def factory(settings):
        built.append(settings)
        return FakeModel(reply=SimpleNamespace(text="Solid."))

    service = CommentaryService(_settings(tmp_path), model_factory=factory)
    await service.generate(default_seed_players()[0])
    await service.generate(default_seed_players()[1])

    assert len(built) == 1


@pytest.mark.anyio
async def test_unconfigured_service_never_builds_model(tmp_path):
    def factory(settings):
        raise AssertionError("no model expected")

    service = CommentaryService(_settings(tmp_path, api_key=None), model_factory=factory)

    assert not service.configured
    assert await service.generate(default_seed_players()[0]) == FALLBACK_NOT_CONFIGURED


@pytest.mark.anyio
@pytest.mark.parametrize(
    "error",
    [
        google_exceptions.ServiceUnavailable("down"),
        google_exceptions.InvalidArgument("API key not valid"),
        TimeoutError("deadline exceeded"),
    ],
)
async def test_service_failures_fall_back(tmp_path, error):
    service = _service(tmp_path, FakeModel(error=error))
    assert await service.generate(default_seed_players()[0]) == FALLBACK_SERVICE_ERROR


@pytest.mark.anyio
@pytest.mark.parametrize(
    "reply",
    [
        SimpleNamespace(text="   ", candidates=[]),
        SimpleNamespace(candidates=[]),
        _BlockedReply(),
    ],
)
async def test_empty_reply_falls_back(tmp_path, reply):
    service = _service(tmp_path, FakeModel(reply=reply))
    assert await service.generate(default_seed_players()[0]) == FALLBACK_EMPTY_RESPONSE


@pytest.mark.anyio
async def test_multi_part_reply_is_joined(tmp_path):
    service = _service(tmp_path, FakeModel(reply=_BlockedReply("**Strengths**", "Quick release.")))
    assert await service.generate(default_seed_players()[0]) == "**Strengths**\nQuick release."


def test_gemini_model_configures_sdk(tmp_path, monkeypatch):
    configured = {}
    built = {}

    def fake_configure(**kwargs):
        configured.update(kwargs)

    class FakeGenerativeModel:
        def __init__(self, model_name, **kwargs):
            built["model_name"] = model_name
            built.update(kwargs)

    monkeypatch.setattr(commentary_service.genai, "configure", fake_configure)
    monkeypatch.setattr(commentary_service.genai, "GenerativeModel", FakeGenerativeModel)

    model = gemini_model(_settings(tmp_path, genai_endpoint="genai.internal.test"))

    assert isinstance(model, FakeGenerativeModel)
    assert configured["api_key"] == "test-key"
    assert configured["client_options"] == {"api_endpoint": "genai.internal.test"}
    assert built["model_name"] == "gemini-2.5-flash"
    assert built["system_instruction"] == commentary_service.SYSTEM_INSTRUCTION


def test_gemini_model_uses_default_endpoint(tmp_path, monkeypatch):
    configured = {}
    monkeypatch.setattr(commentary_service.genai, "configure", lambda **kwargs: configured.update(kwargs))
    monkeypatch.setattr(commentary_service.genai, "GenerativeModel", lambda *args, **kwargs: object())

    gemini_model(_settings(tmp_path))

    assert configured["client_options"] is None
