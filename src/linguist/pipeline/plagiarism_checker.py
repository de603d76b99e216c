"""Web originality check: search distinctive sentences of the draft."""

from __future__ import annotations

import logging
import re

from linguist.clients.search_client import SearchClient
from linguist.models.plagiarism import PlagiarismMatch, PlagiarismResult

logger = logging.getLogger(__name__)

MIN_PROBE_WORDS = 8
MEDIUM_OVERLAP = 0.6
PENALTY_PER_MATCH = 15

_SENTENCE_END = re.compile(r"(?<=[.!?])\s+|\n+")
_WORD = re.compile(r"\w+")


def _normalize(text: str) -> str:
    return " ".join(text.lower().split())


def select_probes(text: str, max_queries: int) -> list[str]:
    """Pick the longest sentences (by word count) as search probes."""
    sentences = [s.strip() for s in _SENTENCE_END.split(text) if s.strip()]
    sentences = [s for s in sentences if len(s.split()) >= MIN_PROBE_WORDS]
    sentences.sort(key=lambda s: len(s.split()), reverse=True)
    return sentences[:max_queries]


def classify(probe: str, content: str) -> str | None:
    """Return "High" / "Medium" similarity for a search hit, or None."""
    if _normalize(probe) in _normalize(content):
        return "High"
    probe_words = {w.lower() for w in _WORD.findall(probe)}
    if not probe_words:
        return None
    content_words = {w.lower() for w in _WORD.findall(content)}
    if len(probe_words & content_words) / len(probe_words) >= MEDIUM_OVERLAP:
        return "Medium"
    return None


def score(matches: list[PlagiarismMatch]) -> PlagiarismResult:
    originality = max(0, 100 - PENALTY_PER_MATCH * len(matches))
    if originality == 100:
        status = "clean"
    elif originality < 50:
        status = "detected"
    else:
        status = "suspicious"
    return PlagiarismResult(matches=matches, originality_score=originality, status=status)


class PlagiarismChecker:
    """Search the web for passages of the draft and score its originality."""

    def __init__(
        self,
        search: SearchClient,
        max_chars: int = 1500,
        max_queries: int = 3,
        max_results: int = 3,
        search_depth: str = "basic",
    ):
        self.search = search
        self.max_chars = max_chars
        self.max_queries = max_queries
        self.max_results = max_results
        self.search_depth = search_depth

    async def check(self, text: str) -> PlagiarismResult:
        """Check the head of ``text``. Search failures yield a clean result."""
        probes = select_probes(text[: self.max_chars], self.max_queries)
        if not probes:
            return PlagiarismResult()

        matches: list[PlagiarismMatch] = []
        seen_urls: set[str] = set()
        try:
            for probe in probes:
                hits = await self.search.search_phrase(
                    probe,
                    max_results=self.max_results,
                    search_depth=self.search_depth,
                )
                for hit in hits:
                    similarity = classify(probe, hit["content"])
                    if similarity is None or hit["url"] in seen_urls:
                        continue
                    seen_urls.add(hit["url"])
                    matches.append(
                        PlagiarismMatch(
                            segment=probe,
                            source_url=hit["url"],
                            source_title=hit["title"],
                            similarity=similarity,
                        )
                    )
        except Exception:
            logger.exception("Originality check failed")
            return PlagiarismResult()

        logger.info("Originality check: %d matches for %d probes", len(matches), len(probes))
        return score(matches)
