"""AI enrichment for journal entries.

This module provides:
1. `OpenAIProvider` – sends a single prompt to the OpenAI Chat Completions API
   and returns the generated text.  Any SDK error propagates to the caller.
2. `extract_json` – decodes a JSON object from model output, first strictly,
   then by scanning for the first complete ``{...}`` object embedded in prose
   or code fences.
3. `EnrichmentClient` – turns entry content into an `Analysis` (summary + mood).
   It never raises: a missing provider, a provider error or undecodable output
   all produce `FALLBACK_ANALYSIS`.
"""

from __future__ import annotations

import json
import logging
import re
from typing import NamedTuple, Optional

from openai import OpenAI

from journal.models import MOODS, DEFAULT_MOOD


class Analysis(NamedTuple):
    summary: str
    mood: str


FALLBACK_ANALYSIS = Analysis(summary="AI analysis unavailable", mood=DEFAULT_MOOD)
MISSING_SUMMARY = "No summary available"

ANALYSIS_PROMPT = (
    "Analyze this journal entry and provide:\n"
    "1) A brief 1-2 sentence summary.\n"
    "2) The detected mood (choose from: {moods}).\n"
    'Return _only_ a valid JSON object with keys "summary" and "mood".\n\n'
    "Journal entry:\n{content}"
)

SYSTEM_PROMPT = (
    "You are a helpful assistant that analyses a user's personal journal. "
    "Always answer with a single minified JSON object and nothing else."
)


# ----------------------------------------------------------------------------------
# Provider
# ----------------------------------------------------------------------------------

class OpenAIProvider:
    """Thin wrapper over the OpenAI client; one request per call, no retries."""

    def __init__(self, api_key: str, model: str = "gpt-4o-mini", timeout: float = 30.0,
                 client: Optional[OpenAI] = None):
        self.model = model
        self._client = client or OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    def generate(self, prompt: str) -> str:
        response = self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=0.2,
            max_tokens=300,
        )
        content = response.choices[0].message.content
        if content is None:
            raise ValueError("Empty completion from OpenAI")
        return content.strip()


# ----------------------------------------------------------------------------------
# Decoding
# ----------------------------------------------------------------------------------

_decoder = json.JSONDecoder()
_OBJECT_START = re.compile(r"\{")


def extract_json(text: str) -> Optional[dict]:
    """Return the JSON object carried by *text*, or None."""
    if not text:
        return None

    try:
        data = json.loads(text)
    except ValueError:
        data = None
    if isinstance(data, dict):
        return data

    for match in _OBJECT_START.finditer(text):
        try:
            data, _ = _decoder.raw_decode(text, match.start())
        except ValueError:
            continue
        if isinstance(data, dict):
            return data
    return None


def normalize_mood(value) -> str:
    if isinstance(value, str):
        mood = value.strip().lower()
        if mood in MOODS:
            return mood
    return DEFAULT_MOOD


# ----------------------------------------------------------------------------------
# Client
# ----------------------------------------------------------------------------------

class EnrichmentClient:
    """Best-effort summary and mood labelling for journal content."""

    def __init__(self, provider=None, logger: Optional[logging.Logger] = None):
        self.provider = provider
        self.logger = logger or logging.getLogger(__name__)

    @property
    def available(self) -> bool:
        return self.provider is not None

    def generate_json(self, prompt: str) -> Optional[dict]:
        """Run *prompt* and decode a JSON object from the reply.

        Returns None on any failure; errors are logged, never raised."""
        if self.provider is None:
            self.logger.debug("AI provider not configured; skipping generation")
            return None

        try:
            raw = self.provider.generate(prompt)
        except Exception as exc:  # noqa: BLE001 – every provider error means fallback
            self.logger.warning("AI provider call failed: %s", exc)
            return None

        data = extract_json(raw)
        if data is None:
            self.logger.info("Could not decode JSON from AI response: %r", raw)
        return data

    def analyze(self, content: str) -> Analysis:
        if not content or not content.strip():
            return FALLBACK_ANALYSIS

        data = self.generate_json(
            ANALYSIS_PROMPT.format(moods=", ".join(MOODS), content=content)
        )
        if data is None:
            return FALLBACK_ANALYSIS

        summary = data.get("summary")
        if not isinstance(summary, str) or not summary.strip():
            summary = MISSING_SUMMARY
        return Analysis(summary=summary.strip(), mood=normalize_mood(data.get("mood")))


def build_enrichment_client(config, logger=None) -> EnrichmentClient:
    """Create the default client from app config; no key means fallback only."""
    api_key = config.get("OPENAI_API_KEY")
    provider = None
    if api_key:
        provider = OpenAIProvider(
            api_key=api_key,
            model=config.get("OPENAI_MODEL", "gpt-4o-mini"),
            timeout=config.get("OPENAI_TIMEOUT", 30.0),
        )
    return EnrichmentClient(provider=provider, logger=logger)
