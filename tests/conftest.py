import pytest

from config.config import Config

ENV_KEYS = (
    "MODEL_PROVIDER",
    "RAG_MODEL_PROVIDER",
    "OPENAI_API_KEY",
    "GEMINI_API_KEY",
    "GROQ_API_KEY",
    "DEEPSEEK_API_KEY",
    "SEARCH_PROVIDER",
    "TAVILY_API_KEY",
    "GOOGLE_SEARCH_API_KEY",
    "GOOGLE_SEARCH_ENGINE_ID",
    "PORT",
    "ALLOWED_ORIGIN",
    "MODEL_TIMEOUT_S",
    "PAGE_TIMEOUT_S",
    "FETCH_MAX_CHARS",
)


@pytest.fixture
def clean_env(monkeypatch):
    # setenv first so teardown also removes values loaded from .env files
    for key in ENV_KEYS:
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return monkeypatch


@pytest.fixture
def config(clean_env, tmp_path):
    clean_env.setenv("MODEL_PROVIDER", "openai")
    clean_env.setenv("RAG_MODEL_PROVIDER", "openai")
    clean_env.setenv("OPENAI_API_KEY", "sk-test")
    clean_env.setenv("SEARCH_PROVIDER", "tavily")
    clean_env.setenv("TAVILY_API_KEY", "tvly-test")
    return Config(env_file=tmp_path / ".env")
