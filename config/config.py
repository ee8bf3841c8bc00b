import os
from dotenv import load_dotenv
from pathlib import Path
from enum import Enum

from models.errors import ConfigurationError


class ModelProvider(Enum):
    """Supported language model providers."""
    GEMINI = "gemini"
    OPENAI = "openai"
    GROQ = "groq"
    DEEPSEEK = "deepseek"


class SearchProvider(Enum):
    """Supported web search providers."""
    TAVILY = "tavily"
    GOOGLE = "google"


DEFAULT_MODELS = {
    ModelProvider.OPENAI.value: "gpt-4o-mini",
    ModelProvider.GEMINI.value: "gemini-2.5-flash",
    ModelProvider.GROQ.value: "llama-3.3-70b-versatile",
    ModelProvider.DEEPSEEK.value: "deepseek-chat",
}

API_KEY_ENV = {
    ModelProvider.OPENAI.value: "OPENAI_API_KEY",
    ModelProvider.GEMINI.value: "GEMINI_API_KEY",
    ModelProvider.GROQ.value: "GROQ_API_KEY",
    ModelProvider.DEEPSEEK.value: "DEEPSEEK_API_KEY",
}


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}")


class Config:
    """
    Application configuration, read once at process start.

    The instance is passed to the model gateway, the web evidence source and the
    server factory; nothing below those constructors reads the environment.
    """

    def __init__(self, env_file: str | Path | None = None):
        """Initialize configuration with environment variables."""
        env_path = Path(env_file) if env_file else Path(__file__).parent.parent / '.env'
        if env_path.exists():
            load_dotenv(dotenv_path=env_path)

        # Model providers
        self.MODEL_PROVIDER = os.getenv('MODEL_PROVIDER', ModelProvider.GEMINI.value).strip().lower()
        self.RAG_MODEL_PROVIDER = os.getenv('RAG_MODEL_PROVIDER', ModelProvider.GEMINI.value).strip().lower()

        self.OPENAI_API_KEY = os.getenv('OPENAI_API_KEY')
        self.GEMINI_API_KEY = os.getenv('GEMINI_API_KEY')
        self.GROQ_API_KEY = os.getenv('GROQ_API_KEY')
        self.DEEPSEEK_API_KEY = os.getenv('DEEPSEEK_API_KEY')

        self.OPENAI_MODEL = os.getenv('OPENAI_MODEL') or DEFAULT_MODELS['openai']
        self.GEMINI_MODEL = os.getenv('GEMINI_MODEL') or DEFAULT_MODELS['gemini']
        self.GROQ_MODEL = os.getenv('GROQ_MODEL') or DEFAULT_MODELS['groq']
        self.DEEPSEEK_MODEL = os.getenv('DEEPSEEK_MODEL') or DEFAULT_MODELS['deepseek']

        # Web search
        self.SEARCH_PROVIDER = os.getenv('SEARCH_PROVIDER', SearchProvider.TAVILY.value).strip().lower()
        self.TAVILY_API_KEY = os.getenv('TAVILY_API_KEY')
        self.GOOGLE_SEARCH_API_KEY = os.getenv('GOOGLE_SEARCH_API_KEY')
        self.GOOGLE_SEARCH_ENGINE_ID = os.getenv('GOOGLE_SEARCH_ENGINE_ID')

        # Server
        self.PORT = int(os.getenv('PORT', '8000'))
        self.ALLOWED_ORIGIN = os.getenv('ALLOWED_ORIGIN', 'http://localhost:3000')

        # Timeouts and limits
        self.MODEL_TIMEOUT_S = _float_env('MODEL_TIMEOUT_S', 60.0)
        self.PAGE_TIMEOUT_S = _float_env('PAGE_TIMEOUT_S', 15.0)
        self.FETCH_MAX_CHARS = int(_float_env('FETCH_MAX_CHARS', 12000))

    def api_key_for(self, provider: str) -> str | None:
        env_name = API_KEY_ENV.get(provider)
        return getattr(self, env_name) if env_name else None

    def model_for(self, provider: str) -> str:
        return getattr(self, f"{provider.upper()}_MODEL", None) or DEFAULT_MODELS.get(provider, "")

    def validate(self) -> "Config":
        """
        Validate that all required configuration is present for the selected providers.

        Returns:
            The same instance, so ``Config().validate()`` can be chained.

        Raises:
            ConfigurationError: listing every missing or invalid setting
        """
        problems: list[str] = []
        valid_models = [e.value for e in ModelProvider]

        for name in ('MODEL_PROVIDER', 'RAG_MODEL_PROVIDER'):
            provider = getattr(self, name)
            if provider not in valid_models:
                problems.append(f"Unknown {name} '{provider}'. Must be one of: {', '.join(valid_models)}")
            elif not self.api_key_for(provider):
                problems.append(f"{API_KEY_ENV[provider]} is not set (required by {name}={provider})")

        if self.SEARCH_PROVIDER == SearchProvider.TAVILY.value:
            if not self.TAVILY_API_KEY:
                problems.append("TAVILY_API_KEY is not set (required by SEARCH_PROVIDER=tavily)")
        elif self.SEARCH_PROVIDER == SearchProvider.GOOGLE.value:
            if not self.GOOGLE_SEARCH_API_KEY or not self.GOOGLE_SEARCH_ENGINE_ID:
                problems.append(
                    "GOOGLE_SEARCH_API_KEY and GOOGLE_SEARCH_ENGINE_ID are required by SEARCH_PROVIDER=google"
                )
        else:
            problems.append(
                f"Unknown SEARCH_PROVIDER '{self.SEARCH_PROVIDER}'. "
                f"Must be one of: {', '.join(e.value for e in SearchProvider)}"
            )

        if self.MODEL_TIMEOUT_S <= 0 or self.PAGE_TIMEOUT_S <= 0:
            problems.append("MODEL_TIMEOUT_S and PAGE_TIMEOUT_S must be positive")

        if problems:
            raise ConfigurationError("; ".join(problems))
        return self

    def get_model_info(self) -> str:
        """
        Get information about the currently selected model.

        Returns:
            str: Formatted string with model information
        """
        return f"{self.MODEL_PROVIDER} ({self.model_for(self.MODEL_PROVIDER)}), search via {self.SEARCH_PROVIDER}"
