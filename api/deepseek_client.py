from .openai_client import OpenAIClient


class DeepSeekClient(OpenAIClient):
    """
    DeepSeek API client.

    The DeepSeek API is OpenAI-compatible, so only the base URL differs.
    Models: "deepseek-chat" (general chat), "deepseek-reasoner" (reasoning).
    """

    provider_name = "deepseek"
    base_url = "https://api.deepseek.com/v1"
    default_model = "deepseek-chat"
