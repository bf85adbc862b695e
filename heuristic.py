"""Keyword-based fallback scoring used when the external classifier is unavailable."""

from typing import Any, List, Tuple

from schemas import AnalysisResult, Credibility, Status, TextAnalysis

# Suspicious keywords
SUSPICIOUS_KEYWORDS: Tuple[str, ...] = (
    "breaking",
    "shocking",
    "unbelievable",
    "secret",
    "exposed",
    "leaked",
    "exclusive",
    "bombshell",
    "scandal",
    "conspiracy",
    "hoax",
    "fake",
    "lies",
    "cover-up",
    "hidden truth",
    "they don't want you to know",
)

# Phrases that usually come with sourced reporting
RELIABLE_INDICATORS: Tuple[str, ...] = (
    "according to",
    "research shows",
    "study finds",
    "experts say",
    "data indicates",
    "official statement",
    "confirmed by",
    "verified",
)

KEYWORD_WEIGHT = 10
INDICATOR_WEIGHT = 5
SHORT_TEXT_WORDS = 50
SHORT_TEXT_PENALTY = 20

HIGH_CREDIBILITY_BELOW = 30
MEDIUM_CREDIBILITY_BELOW = 60


def classify_score(score: int) -> Tuple[Credibility, Status]:
    """Map a 0-100 suspicion score to its credibility level and status label."""
    if score < HIGH_CREDIBILITY_BELOW:
        return "high", "likely-real"
    elif score < MEDIUM_CREDIBILITY_BELOW:
        return "medium", "questionable"
    else:
        return "low", "likely-fake"


def clamp_score(value: float) -> int:
    return max(0, min(100, int(round(value))))


def _match_terms(text_lower: str, vocabulary: Tuple[str, ...]) -> List[str]:
    return [term for term in vocabulary if term in text_lower]


def fallback_analysis(text: Any) -> AnalysisResult:
    """Score ``text`` with the static keyword lists.

    Each vocabulary term counts once no matter how often it appears. Suspicion
    terms add 10, reliability terms subtract 5, and texts under 50 words get a
    flat 20 on top. The result is clamped to 0-100.
    """
    if not isinstance(text, str):
        text = ""

    text_lower = text.lower()
    suspicious = _match_terms(text_lower, SUSPICIOUS_KEYWORDS)
    reliable = _match_terms(text_lower, RELIABLE_INDICATORS)

    raw_score = len(suspicious) * KEYWORD_WEIGHT - len(reliable) * INDICATOR_WEIGHT
    text_length = len(text.split())
    if text_length < SHORT_TEXT_WORDS:
        raw_score += SHORT_TEXT_PENALTY

    score = clamp_score(raw_score)
    credibility, status = classify_score(score)

    return AnalysisResult(
        score=score,
        credibility=credibility,
        status=status,
        fake_keywords_found=len(suspicious),
        reliable_indicators_found=len(reliable),
        analysis=TextAnalysis(
            text_length=text_length,
            suspicious_keywords=suspicious,
            reliable_indicators=reliable,
        ),
    )
