"""Topic sources feeding candidate news items into the pipeline."""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Protocol, Sequence

import httpx

from ..core.types import Topic

LOGGER = logging.getLogger(__name__)


class TopicSource(Protocol):
    """Anything able to deliver candidate topics.

    Callers must not rely on the number or the order of returned topics.
    """

    async def fetch(self) -> List[Topic]:  # pragma: no cover - protocol
        ...


class TopicSourceError(RuntimeError):
    """Raised when a remote feed cannot be read."""


REPRESENTATIVE_TOPICS: tuple[Topic, ...] = (
    Topic(
        title="OpenAI představila GPT-4 Vision",
        description="Nová multimodální schopnost zpracování obrazu a textu",
        source="TechCrunch",
        url="https://techcrunch.com/gpt4-vision",
        relevance_score=0.95,
    ),
    Topic(
        title="GitHub Copilot X s chat funkcionalitou",
        description="AI asistent přímo v editoru s konverzačním rozhraním",
        source="GitHub Blog",
        url="https://github.blog/copilot-x",
        relevance_score=0.88,
    ),
    Topic(
        title="Meta uvádí Llama 2 open source model",
        description="Konkurence ChatGPT dostupná zdarma pro vývojáře",
        source="Meta AI",
        url="https://ai.meta.com/llama",
        relevance_score=0.92,
    ),
    Topic(
        title="Apple Vision Pro: AR/VR revoluce?",
        description="První hands-on recenze a praktické využití",
        source="Product Hunt",
        url="https://producthunt.com/vision-pro",
        relevance_score=0.78,
    ),
    Topic(
        title="Quantum computing breakthrough IBM",
        description="1000-qubit procesor a praktické aplikace",
        source="ArXiv",
        url="https://arxiv.org/quantum-2024",
        relevance_score=0.85,
    ),
)


class StaticTopicSource:
    """Returns a fixed representative set of topics."""

    def __init__(self, topics: Sequence[Topic] = REPRESENTATIVE_TOPICS, *, delay: float = 0.0) -> None:
        self._topics = tuple(topics)
        self._delay = delay

    async def fetch(self) -> List[Topic]:
        if self._delay > 0:
            await asyncio.sleep(self._delay)
        return list(self._topics)


class HackerNewsTopicSource:
    """Front page stories from Hacker News, scored by their points."""

    def __init__(
        self,
        *,
        base_url: str = "https://hn.algolia.com/api/v1",
        limit: int = 10,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._limit = limit
        self._timeout = timeout
        self._transport = transport

    async def fetch(self) -> List[Topic]:
        params = {"tags": "front_page", "hitsPerPage": str(self._limit)}
        data = await _get_json(f"{self._base_url}/search", params, self._timeout, self._transport)
        hits = [hit for hit in data.get("hits") or [] if hit.get("title")]
        if not hits:
            return []
        max_points = max(int(hit.get("points") or 0) for hit in hits) or 1
        return [
            Topic(
                title=hit["title"],
                description=hit.get("story_text") or "",
                source="Hacker News",
                url=hit.get("url") or f"https://news.ycombinator.com/item?id={hit.get('objectID')}",
                relevance_score=round(min(1.0, int(hit.get("points") or 0) / max_points), 4),
            )
            for hit in hits
        ]


class NewsApiTopicSource:
    """Technology headlines from NewsAPI; the score decreases with the rank."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: str = "https://newsapi.org/v2",
        limit: int = 10,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._limit = limit
        self._timeout = timeout
        self._transport = transport

    async def fetch(self) -> List[Topic]:
        if not self._api_key:
            LOGGER.warning("NewsAPI key missing - skipping NewsAPI headlines")
            return []
        params = {"category": "technology", "pageSize": str(self._limit), "apiKey": self._api_key}
        data = await _get_json(f"{self._base_url}/top-headlines", params, self._timeout, self._transport)
        articles = [article for article in data.get("articles") or [] if article.get("title")]
        total = len(articles)
        return [
            Topic(
                title=article["title"],
                description=article.get("description") or "",
                source=(article.get("source") or {}).get("name") or "NewsAPI",
                url=article.get("url") or "",
                relevance_score=round(1.0 - index / total, 4),
            )
            for index, article in enumerate(articles)
        ]


class CompositeTopicSource:
    """Queries several sources in order and skips the ones that fail."""

    def __init__(self, sources: Sequence[TopicSource]) -> None:
        self._sources = list(sources)

    async def fetch(self) -> List[Topic]:
        topics: List[Topic] = []
        for source in self._sources:
            try:
                fetched = await source.fetch()
            except Exception as exc:
                LOGGER.warning("Topic source %s failed, skipping it: %s", type(source).__name__, exc)
                continue
            LOGGER.info("Topic source %s returned %s topics", type(source).__name__, len(fetched))
            topics.extend(fetched)
        return topics


async def _get_json(
    url: str,
    params: Dict[str, str],
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport],
) -> Dict[str, Any]:
    async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
        try:
            response = await client.get(url, params=params, headers={"Accept": "application/json"})
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise TopicSourceError(f"Feed {url} returned status {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise TopicSourceError(f"Failed to request {url}") from exc
        return response.json()


__all__ = [
    "CompositeTopicSource",
    "HackerNewsTopicSource",
    "NewsApiTopicSource",
    "REPRESENTATIVE_TOPICS",
    "StaticTopicSource",
    "TopicSource",
    "TopicSourceError",
]
