"""
Footgun Search Engine

Keyword search over a loaded catalog, used by the CLI and the API.
"""

import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .catalog import FootgunCatalog
from .models import FootgunRecord

STOP_WORDS = {
    'the', 'a', 'an', 'is', 'are', 'was', 'were', 'be', 'been',
    'being', 'have', 'has', 'had', 'do', 'does', 'did', 'will',
    'would', 'could', 'should', 'may', 'might', 'must', 'shall',
    'can', 'to', 'of', 'in', 'for', 'on', 'with', 'at', 'by',
    'from', 'as', 'into', 'through', 'during', 'before', 'after',
    'above', 'below', 'between', 'under', 'again', 'further',
    'then', 'once', 'here', 'there', 'when', 'where', 'why',
    'how', 'all', 'each', 'few', 'more', 'most', 'other', 'some',
    'such', 'no', 'nor', 'not', 'only', 'own', 'same', 'so',
    'than', 'too', 'very', 'just', 'and', 'but', 'if', 'or',
    'because', 'until', 'while', 'this', 'that', 'these', 'those',
    'its', 'it', 'you', 'your',
}

# Field weights
TITLE_WEIGHT = 1.0
FRAMEWORK_WEIGHT = 0.8
EXPLANATION_WEIGHT = 0.7
REPRODUCTION_WEIGHT = 0.6
REMEDY_WEIGHT = 0.5


@dataclass
class FootgunMatch:
    """A matched footgun with relevance score"""
    record: FootgunRecord
    relevance_score: float
    matched_terms: List[str] = field(default_factory=list)


def tokenize(text: str) -> List[str]:
    """Tokenize text into searchable words"""
    words = re.findall(r'\b\w+\b', text.lower())
    return [w for w in words if w not in STOP_WORDS and len(w) > 2]


class FootgunSearchEngine:
    """
    Inverted-index search over a footgun catalog.

    Each word maps to the records it appears in, weighted by the field it
    came from. A record's score is the sum over query terms of the best
    weight that term has in the record, normalised by the query length.
    """

    def __init__(self, catalog: FootgunCatalog):
        self.catalog = catalog
        self.word_index: Dict[str, Dict[int, float]] = defaultdict(dict)
        self._order = {record.id: position for position, record in enumerate(catalog)}
        self._build_search_index()

    def _index(self, text: Optional[str], footgun_id: int, weight: float) -> None:
        if not text:
            return
        for word in tokenize(text):
            postings = self.word_index[word]
            if postings.get(footgun_id, 0.0) < weight:
                postings[footgun_id] = weight

    def _build_search_index(self) -> None:
        for record in self.catalog:
            self._index(record.title, record.id, TITLE_WEIGHT)
            self._index(record.framework, record.id, FRAMEWORK_WEIGHT)
            self._index(record.explanation, record.id, EXPLANATION_WEIGHT)
            self._index(record.reproduction.scenario, record.id, REPRODUCTION_WEIGHT)
            for remedy in record.remedies:
                self._index(remedy.guidance, record.id, REMEDY_WEIGHT)

    def search(self, query: str, limit: int = 10) -> List[FootgunMatch]:
        """
        Search for footguns matching the query.

        Args:
            query: Search query text
            limit: Maximum number of results

        Returns:
            Matches sorted by relevance, ties broken by catalog order
        """
        query_words = list(dict.fromkeys(tokenize(query)))
        if not query_words or limit <= 0:
            return []

        scores: Dict[int, float] = defaultdict(float)
        terms: Dict[int, List[str]] = defaultdict(list)

        for word in query_words:
            for footgun_id, weight in self.word_index.get(word, {}).items():
                scores[footgun_id] += weight
                terms[footgun_id].append(word)

        ranked: List[Tuple[int, float]] = sorted(
            scores.items(),
            key=lambda item: (-item[1], self._order[item[0]]),
        )

        return [
            FootgunMatch(
                record=self.catalog.by_id(footgun_id),
                relevance_score=round(score / len(query_words), 3),
                matched_terms=terms[footgun_id],
            )
            for footgun_id, score in ranked[:limit]
        ]

    def get_statistics(self) -> Dict[str, int]:
        return {
            "indexed_footguns": len(self.catalog),
            "unique_words_indexed": len(self.word_index),
        }
