import asyncio
import logging
import os
from typing import Any, Dict, Optional

import aiohttp

from core.exceptions import GenerationError

logger = logging.getLogger(__name__)

GENERATION_ERROR_MESSAGE = "⚠️ Sorry, there was an error generating the response. Please try again later."


class GeminiService:
    def __init__(self, api_key: Optional[str] = None, model: str = "gemini-2.0-flash",
                 temperature: float = 0.7, top_p: float = 0.9, top_k: int = 40,
                 timeout_seconds: int = 60, max_retries: int = 2):
        # Direct REST API configuration
        self.api_key = api_key or os.getenv('GEMINI_API_KEY')
        self.base_url = "https://generativelanguage.googleapis.com/v1beta"
        self.model = model

        # Career coaching content; only block clearly harmful output
        self.safety_settings = [
            {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_ONLY_HIGH"},
            {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_ONLY_HIGH"},
        ]
        self.generation_config = {
            "temperature": temperature,
            "topP": top_p,
            "topK": top_k,
        }

        self._request_timeout = timeout_seconds
        self._max_retries = max_retries

    def _build_payload(self, prompt: str) -> Dict[str, Any]:
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": self.generation_config,
            "safetySettings": self.safety_settings,
        }

    @staticmethod
    def _extract_text(data: Dict[str, Any]) -> str:
        """Pull the generated text out of a generateContent response"""
        candidates = data.get("candidates") or []
        if not candidates:
            feedback = data.get("promptFeedback", {})
            raise GenerationError(f"No candidates in Gemini response (feedback: {feedback})")

        parts = candidates[0].get("content", {}).get("parts") or []
        text = "".join(part.get("text", "") for part in parts)
        if not text:
            reason = candidates[0].get("finishReason")
            raise GenerationError(f"Empty Gemini candidate (finishReason: {reason})")
        return text

    async def _request(self, prompt: str) -> str:
        """Single generateContent call; raises GenerationError on any failure"""
        url = f"{self.base_url}/models/{self.model}:generateContent?key={self.api_key}"

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(
                    url,
                    json=self._build_payload(prompt),
                    timeout=aiohttp.ClientTimeout(total=self._request_timeout),
                    headers={"Content-Type": "application/json"}
                ) as response:

                    if response.status != 200:
                        error_text = await response.text()
                        raise GenerationError(f"Gemini API error {response.status}: {error_text[:300]}")

                    data = await response.json(content_type=None)

        except asyncio.TimeoutError as e:
            raise GenerationError(f"Gemini API timeout after {self._request_timeout}s") from e
        except aiohttp.ClientError as e:
            raise GenerationError(f"Gemini API connection error: {e}") from e
        except ValueError as e:
            raise GenerationError(f"Gemini API returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise GenerationError(f"Gemini API returned {type(data).__name__} instead of a JSON object")

        return self._extract_text(data)

    async def generate_text(self, prompt: str) -> str:
        """
        Generate text for a prompt.

        Never raises: after the last failed attempt a user-facing apology is
        returned in place of the generated text.
        """
        logger.info(f"📡 Sending prompt to Gemini: {prompt[:200]}...")

        for attempt in range(self._max_retries + 1):
            try:
                result = await self._request(prompt)
                logger.info("✅ Received response from Gemini")
                return result

            except GenerationError as e:
                logger.error(f"❌ Gemini generation error (attempt {attempt + 1}/{self._max_retries + 1}): {e}")
                if attempt < self._max_retries:
                    # Back off before retrying
                    await asyncio.sleep(2 ** attempt)

        return GENERATION_ERROR_MESSAGE
