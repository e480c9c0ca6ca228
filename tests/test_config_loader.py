from pathlib import Path

from flagroster.config_loader import DEFAULT_MODEL, DEFAULT_TIMEOUT, load_settings


def test_defaults_without_environment():
    settings = load_settings({})

    assert settings.db_path == Path.home() / ".flagroster" / "flagroster.sqlite"
    assert settings.genai_api_key is None
    assert settings.genai_model == DEFAULT_MODEL
    assert settings.genai_endpoint is None
    assert settings.genai_timeout == DEFAULT_TIMEOUT


def test_pytest_runs_use_temp_database():
    settings = load_settings({"PYTEST_CURRENT_TEST": "tests/test_config_loader.py::x"})
    assert settings.db_path.parent.name == "flagroster-test"


def test_environment_overrides(tmp_path):
    settings = load_settings(
        {
            "FLAGROSTER_DB_PATH": str(tmp_path / "team.sqlite"),
            "GEMINI_API_KEY": " secret ",
            "FLAGROSTER_GENAI_MODEL": "gemini-test",
            "FLAGROSTER_GENAI_ENDPOINT": " genai.internal.test ",
            "FLAGROSTER_GENAI_TIMEOUT": "5",
        }
    )

    assert settings.db_path == tmp_path / "team.sqlite"
    assert settings.genai_api_key == "secret"
    assert settings.genai_model == "gemini-test"
    assert settings.genai_endpoint == "genai.internal.test"
    assert settings.genai_timeout == 5.0


def test_api_key_precedence():
    settings = load_settings({"API_KEY": "generic", "FLAGROSTER_GENAI_API_KEY": "specific"})
    assert settings.genai_api_key == "specific"


def test_invalid_timeout_uses_default_and_clamps():
    assert load_settings({"FLAGROSTER_GENAI_TIMEOUT": "soon"}).genai_timeout == DEFAULT_TIMEOUT
    assert load_settings({"FLAGROSTER_GENAI_TIMEOUT": "0.1"}).genai_timeout == 1.0
