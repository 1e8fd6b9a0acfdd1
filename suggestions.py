"""
AI-assisted keyword and meta tag suggestions with deterministic fallbacks.

A single generation attempt is made per call. Generation errors, unparsable
responses and payloads of the wrong shape are logged and answered with the
fallback result; nothing here raises to the caller.
"""

import json
import logging
import re
from collections import Counter
from dataclasses import dataclass, asdict
from functools import lru_cache
from typing import Optional, Protocol

import anthropic

from config import AI, FALLBACK_KEYWORDS, META_FALLBACK, STOP_WORDS
from metrics import strip_html
from prompts import get_keyword_prompt, get_meta_tags_prompt

logger = logging.getLogger(__name__)

JSON_FENCE_RE = re.compile(r'```json\n(.*?)\n```', re.DOTALL)
PLAIN_FENCE_RE = re.compile(r'```\n(.*?)\n```', re.DOTALL)
NON_WORD_RE = re.compile(r'\W+', re.ASCII)


@dataclass
class GenerationResult:
    text: str
    error: Optional[str] = None


class TextGenerator(Protocol):
    def generate(self, prompt: str) -> GenerationResult:
        ...


class ClaudeGenerator:
    """Text generation backed by the Anthropic Messages API."""

    def __init__(self, client: Optional[anthropic.Anthropic] = None,
                 model: str = AI["model"], max_tokens: int = AI["max_tokens"]):
        self._client = client
        self.model = model
        self.max_tokens = max_tokens

    @property
    def client(self) -> anthropic.Anthropic:
        if self._client is None:
            self._client = anthropic.Anthropic()
        return self._client

    def generate(self, prompt: str) -> GenerationResult:
        try:
            message = self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
        except anthropic.AnthropicError as e:
            return GenerationResult(text="", error=str(e))
        text = "".join(block.text for block in message.content if getattr(block, "type", "") == "text")
        return GenerationResult(text=text)


@lru_cache
def get_default_generator() -> ClaudeGenerator:
    return ClaudeGenerator()


@dataclass
class KeywordSuggestion:
    keyword: str
    search_volume: str
    difficulty: str
    relevance: float

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_payload(cls, item) -> "KeywordSuggestion":
        if not isinstance(item, dict) or not item.get("keyword"):
            raise ValueError(f"Malformed keyword suggestion: {item!r}")
        relevance = item.get("relevance", 0)
        if isinstance(relevance, bool) or not isinstance(relevance, (int, float)):
            relevance = float(relevance)
        return cls(
            keyword=str(item["keyword"]),
            search_volume=str(item.get("searchVolume", item.get("search_volume", ""))),
            difficulty=str(item.get("difficulty", "")),
            relevance=relevance,
        )


@dataclass
class MetaTagSuggestion:
    title: str
    description: str
    keywords: list[str]

    def to_dict(self) -> dict:
        return asdict(self)


def extract_json_payload(response: str):
    """Parse JSON from a fenced ```json block, a bare ``` block, or the raw text."""
    match = JSON_FENCE_RE.search(response) or PLAIN_FENCE_RE.search(response)
    payload = match.group(1) if match else response
    return json.loads(payload)


def _generate_payload(prompt: str, generator: Optional[TextGenerator], purpose: str):
    """Run one generation and return the parsed JSON, or None on any failure."""
    generator = generator if generator is not None else get_default_generator()
    try:
        response = generator.generate(prompt)
    except Exception as e:
        logger.warning(f"Error generating {purpose}: {e}")
        return None
    if response is None or response.error:
        logger.warning(f"Text generation failed for {purpose}: {getattr(response, 'error', 'no response')}")
        return None
    try:
        return extract_json_payload(response.text or "")
    except ValueError as e:
        logger.warning(f"Error parsing {purpose}: {e}")
        return None


# ── Fallbacks ────────────────────────────────────────────────────────────

def fallback_keyword_suggestions(topic: str, count: int) -> list[KeywordSuggestion]:
    suggestions = [
        KeywordSuggestion(
            keyword=tier["pattern"].format(topic=topic),
            search_volume=tier["search_volume"],
            difficulty=tier["difficulty"],
            relevance=tier["relevance"],
        )
        for tier in FALLBACK_KEYWORDS
    ]
    return suggestions[:max(count, 0)]


def default_title(title: str) -> str:
    limit = META_FALLBACK["max_title_length"]
    ellipsis = META_FALLBACK["ellipsis"]
    if len(title) > limit:
        return title[:limit - len(ellipsis)] + ellipsis
    return title


def default_description(content: str) -> str:
    limit = META_FALLBACK["max_description_length"]
    first_line = strip_html(content).split("\n")[0]
    if len(first_line) > limit:
        return first_line[:limit] + META_FALLBACK["ellipsis"]
    return first_line


def extract_keywords(title: str, content: str) -> list[str]:
    source = strip_html(title + " " + content[:META_FALLBACK["keyword_source_chars"]])
    words = [
        w for w in NON_WORD_RE.split(source.lower())
        if len(w) >= META_FALLBACK["min_keyword_length"] and w not in STOP_WORDS
    ]
    return [word for word, _ in Counter(words).most_common(META_FALLBACK["max_keywords"])]


def fallback_meta_tags(title: str, content: str) -> MetaTagSuggestion:
    return MetaTagSuggestion(
        title=default_title(title),
        description=default_description(content),
        keywords=extract_keywords(title, content),
    )


# ── Public entry points ──────────────────────────────────────────────────

def suggest_keywords(topic: str, count: int = 10,
                     generator: Optional[TextGenerator] = None) -> list[KeywordSuggestion]:
    payload = _generate_payload(get_keyword_prompt(topic, count), generator, "keyword suggestions")
    if isinstance(payload, list):
        try:
            return [KeywordSuggestion.from_payload(item) for item in payload[:max(count, 0)]]
        except (TypeError, ValueError) as e:
            logger.warning(f"Error parsing keyword suggestions: {e}")
    elif payload is not None:
        logger.warning(f"Keyword suggestions were not a JSON array: {type(payload).__name__}")
    return fallback_keyword_suggestions(topic, count)


def suggest_meta_tags(title: str, content: str,
                      generator: Optional[TextGenerator] = None) -> MetaTagSuggestion:
    payload = _generate_payload(get_meta_tags_prompt(title, content), generator, "meta tag suggestions")
    if not isinstance(payload, dict):
        if payload is not None:
            logger.warning(f"Meta tag suggestions were not a JSON object: {type(payload).__name__}")
        return fallback_meta_tags(title, content)

    suggested_title = payload.get("title")
    suggested_description = payload.get("description")
    suggested_keywords = payload.get("keywords")
    return MetaTagSuggestion(
        title=suggested_title if isinstance(suggested_title, str) and suggested_title else default_title(title),
        description=(suggested_description if isinstance(suggested_description, str) and suggested_description
                     else default_description(content)),
        keywords=([str(k) for k in suggested_keywords] if isinstance(suggested_keywords, list)
                  else extract_keywords(title, content)),
    )


class OfflineGenerator:
    """Generator that always fails, forcing the deterministic fallbacks."""

    def generate(self, prompt: str) -> GenerationResult:
        return GenerationResult(text="", error="offline mode")
