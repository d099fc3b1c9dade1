"""
OpenAI API Client

Thin wrapper around the chat completions endpoint.

AI is used ONLY for:
- Generating a job ad from a short description
- Extracting structured data from resume text

Calls are made once; failures are not retried and surface to the route.
"""
from typing import Optional

from openai import OpenAI

from app.core.config import get_settings


class OpenAIClient:
    """
    Wrapper for the OpenAI chat API.
    """

    def __init__(self, api_key: str, model: str):
        self.client = OpenAI(api_key=api_key)
        self.model = model

    def complete(self, system_prompt: str, user_content: str, temperature: float = 0.2) -> str:
        """
        Send one system + user exchange.
        Returns raw text response ("{}" when the model returns nothing).
        """
        response = self.client.chat.completions.create(
            model=self.model,
            temperature=temperature,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_content}
            ]
        )
        if not response.choices:
            return "{}"
        return response.choices[0].message.content or "{}"


# Singleton instance
_openai_client: Optional[OpenAIClient] = None


def get_ai_client() -> Optional[OpenAIClient]:
    """
    Get or create the OpenAI client (singleton pattern).
    Returns None when OPENAI_API_KEY is not configured.
    """
    global _openai_client
    settings = get_settings()
    if not settings.openai_api_key:
        return None
    if _openai_client is None:
        _openai_client = OpenAIClient(settings.openai_api_key, settings.openai_model)
    return _openai_client
