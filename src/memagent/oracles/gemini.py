"""Gemini REST oracle — generateContent over HTTPS via aiohttp."""

from __future__ import annotations

import asyncio
import json
import logging
from dataclasses import dataclass

import aiohttp

from memagent.oracles.base import GenerationConfig, OracleError, OracleResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


def build_payload(prompt: str, config: GenerationConfig | None = None) -> dict:
    """Build the generateContent request body."""
    payload: dict = {"contents": [{"parts": [{"text": prompt}]}]}
    if config is None:
        return payload

    generation: dict = {
        "temperature": config.temperature,
        "maxOutputTokens": config.max_output_tokens,
        "topP": config.top_p,
        "topK": config.top_k,
    }
    if config.stop_sequences:
        generation["stopSequences"] = list(config.stop_sequences)
    payload["generationConfig"] = generation

    if config.safety_settings:
        payload["safetySettings"] = [
            {"category": category, "threshold": threshold}
            for category, threshold in config.safety_settings.items()
        ]
    return payload


def extract_text(body: str) -> str:
    """Pull ``candidates[0].content.parts[0].text`` out of a response body."""
    try:
        data = json.loads(body)
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (json.JSONDecodeError, KeyError, IndexError, TypeError) as e:
        raise OracleError(f"Unparseable Gemini response: {e}") from e
    if not isinstance(text, str):
        raise OracleError("Unparseable Gemini response: text is not a string")
    return text


@dataclass
class GeminiOracle:
    """Direct Gemini API access. One HTTP round-trip per generate() call."""

    api_key: str = ""
    model: str = "gemini-1.5-flash"
    base_url: str = DEFAULT_BASE_URL
    timeout: int = 30

    @property
    def name(self) -> str:
        return "gemini"

    @property
    def url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.model}:generateContent"

    async def generate(
        self,
        prompt: str,
        *,
        config: GenerationConfig | None = None,
    ) -> OracleResponse:
        if not self.api_key:
            raise OracleError("Gemini API key not configured (set GEMINI_API_KEY)")

        status, body = await self._post(build_payload(prompt, config))
        if status != 200:
            logger.error("Gemini API error (status=%d): %s", status, body[:500])
            raise OracleError(f"Gemini API returned status {status}")

        return OracleResponse(text=extract_text(body), model=self.model)

    async def _post(self, payload: dict) -> tuple[int, str]:
        timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    self.url,
                    params={"key": self.api_key},
                    json=payload,
                    headers={"Content-Type": "application/json"},
                ) as resp:
                    return resp.status, await resp.text()
        except asyncio.TimeoutError as e:
            raise OracleError(f"Gemini API timed out after {self.timeout}s") from e
        except aiohttp.ClientError as e:
            raise OracleError(f"Gemini API request failed: {e}") from e

    async def health_check(self) -> bool:
        try:
            response = await self.generate("ping", config=GenerationConfig(max_output_tokens=10))
            return bool(response.text)
        except OracleError:
            return False
