"""
Security tips and password strength commentary from an external text
generation service.

The results are decorative. Every call resolves to a usable value: on any
failure a fixed fallback is returned and the error is only logged.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from . import config

logger = logging.getLogger(__name__)

TIP_PROMPT = (
    "Provide a short, punchy, and actionable cyber security tip for a user "
    "managing their digital vault. Max 20 words. Please provide the response in {language}."
)
STRENGTH_PROMPT = 'Analyze this password strength: "{password}". Return as JSON.'

STRENGTH_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "score": {"type": "NUMBER", "description": "0 to 100 score"},
        "label": {"type": "STRING", "description": "Weak, Medium, Strong"},
        "feedback": {"type": "STRING", "description": "One short sentence advice"},
    },
    "required": ["score", "label", "feedback"],
}


class TipServiceError(Exception):
    """The text service could not produce a usable answer."""


@dataclass
class StrengthReport:
    score: int
    label: str
    feedback: str

    @classmethod
    def fallback(cls) -> 'StrengthReport':
        score, label, feedback = config.FALLBACK_STRENGTH
        return cls(score=score, label=label, feedback=feedback)


def fallback_tip(locale: str) -> str:
    return config.FALLBACK_TIPS.get(locale, config.FALLBACK_TIPS['en'])


class TipFetcher:
    """Client for the tip and strength requests.

    Usage::

        fetcher = TipFetcher()
        tip = await fetcher.fetch_tip("en")
        report = await fetcher.fetch_strength("hunter2")
    """

    def __init__(self, api_key: Optional[str] = None, model: str = config.TIP_MODEL,
                 base_url: str = config.TIP_API_BASE_URL,
                 timeout: float = config.TIP_REQUEST_TIMEOUT_SECONDS,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key if api_key is not None else config.get_api_key()
        self.model = model
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._transport = transport

    async def fetch_tip(self, locale: str) -> str:
        """Return a one-sentence security tip in the language of ``locale``."""
        language = config.LOCALE_LANGUAGE_NAMES.get(locale, config.LOCALE_LANGUAGE_NAMES['en'])
        body = {
            "contents": [{"parts": [{"text": TIP_PROMPT.format(language=language)}]}],
            "generationConfig": {
                "temperature": config.TIP_TEMPERATURE,
                "topP": config.TIP_TOP_P,
            },
        }
        try:
            text = (await self._generate(body)).strip()
            if not text:
                raise TipServiceError("Empty tip")
            return text
        except Exception as e:
            logger.warning(f"Tip request failed, using fallback: {e}")
            return fallback_tip(locale)

    async def fetch_strength(self, password: str) -> StrengthReport:
        """Ask the service to rate ``password``."""
        if not password:
            return StrengthReport(score=0, label="", feedback="")

        body = {
            "contents": [{"parts": [{"text": STRENGTH_PROMPT.format(password=password)}]}],
            "generationConfig": {
                "responseMimeType": "application/json",
                "responseSchema": STRENGTH_SCHEMA,
            },
        }
        try:
            data = json.loads(await self._generate(body))
            return StrengthReport(
                score=max(0, min(100, int(data["score"]))),
                label=str(data["label"]),
                feedback=str(data["feedback"]),
            )
        except Exception as e:
            logger.warning(f"Strength request failed, using fallback: {e}")
            return StrengthReport.fallback()

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    async def _generate(self, body: Dict[str, Any]) -> str:
        """Send one generateContent request and return the answer text.

        Single attempt, no retries.
        """
        if not self.api_key:
            raise TipServiceError("No API key configured")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": self.api_key,
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            resp = await client.post(url, json=body, headers=headers)
            resp.raise_for_status()
            return self._extract_text(resp.json())

    @staticmethod
    def _extract_text(payload: Dict[str, Any]) -> str:
        try:
            parts = payload["candidates"][0]["content"]["parts"]
        except (KeyError, IndexError, TypeError) as e:
            raise TipServiceError(f"Malformed response: {e}") from e
        return "".join(part.get("text", "") for part in parts if isinstance(part, dict))
