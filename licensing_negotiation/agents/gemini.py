"""
Gemini Text Generator
=====================

Text-generation backend on Google's Gemini API via google-genai.

Requires GOOGLE_API_KEY (or GEMINI_API_KEY) in the environment unless a
client is passed in.
"""

from typing import Optional

from google import genai
from google.genai import types
from langsmith import traceable

from ..protocol.errors import GenerationError


class GeminiTextGenerator:
    """
    complete(system_persona, user_prompt) -> raw text, one call per invocation.

    Any failure of the call itself is re-raised as GenerationError.
    """

    def __init__(
        self,
        model: str = "gemini-2.0-flash",
        temperature: float = 0.7,
        client: Optional[genai.Client] = None,
    ):
        self.model = model
        self.temperature = temperature
        self._client = client

    @property
    def client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client()
        return self._client

    @traceable(name="gemini_complete", run_type="llm")
    async def complete(self, system_persona: str, user_prompt: str) -> str:
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=user_prompt,
                config=types.GenerateContentConfig(
                    system_instruction=system_persona,
                    temperature=self.temperature,
                ),
            )
        except Exception as exc:
            raise GenerationError(f"Gemini call failed: {exc}") from exc

        return response.text or ""
