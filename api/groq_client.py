from .openai_client import OpenAIClient


class GroqClient(OpenAIClient):
    """
    Groq API client, through Groq's OpenAI-compatible endpoint.
    """

    provider_name = "groq"
    base_url = "https://api.groq.com/openai/v1"
    default_model = "llama-3.3-70b-versatile"
