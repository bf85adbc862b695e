from datetime import datetime, timezone
from typing import Optional, Tuple

from classifier import ClassifierError, LLMClassifier, llm_classifier
from heuristic import clamp_score, classify_score, fallback_analysis
from logger import get_logger
from schemas import AnalysisResult, ClassifierVerdict, DetectResponse, TextAnalysis

log = get_logger("detector")


class FakeNewsDetector:
    """Routes text to the external classifier or the keyword fallback."""

    def __init__(self, classifier: Optional[LLMClassifier] = None):
        self.classifier = classifier or llm_classifier

    def _normalize_verdict(self, verdict: ClassifierVerdict) -> AnalysisResult:
        """Convert a classifier verdict into an AnalysisResult.

        The score is rounded and clamped, and credibility/status are derived
        from it with the same thresholds the fallback uses.
        """
        score = clamp_score(verdict.score)
        credibility, status = classify_score(score)
        if (credibility, status) != (verdict.credibility, verdict.status):
            log.debug(
                "Classifier labels {}/{} re-derived as {}/{} for score {}",
                verdict.credibility, verdict.status, credibility, status, score,
            )

        return AnalysisResult(
            score=score,
            credibility=credibility,
            status=status,
            fake_keywords_found=verdict.fake_keywords_found,
            reliable_indicators_found=verdict.reliable_indicators_found,
            analysis=TextAnalysis(
                text_length=verdict.analysis.text_length,
                suspicious_keywords=verdict.analysis.suspicious_keywords,
                reliable_indicators=verdict.analysis.reliable_indicators,
            ),
        )

    async def analyze_text(self, text: str, api_key: Optional[str] = None) -> Tuple[AnalysisResult, bool]:
        """Analyze text; returns the result and whether the classifier produced it."""
        if not api_key:
            return fallback_analysis(text), False

        try:
            verdict = await self.classifier.classify(text, api_key)
            return self._normalize_verdict(verdict), True
        except ClassifierError as e:
            log.warning("AI analysis failed, falling back to basic analysis: {}", e)
            return fallback_analysis(text), False
        except Exception:
            log.exception("Unexpected classifier error, falling back to basic analysis")
            return fallback_analysis(text), False

    async def detect(self, text: str, api_key: Optional[str] = None) -> DetectResponse:
        """Build the /detect response for ``text``."""
        result, ai_powered = await self.analyze_text(text, api_key)
        return DetectResponse(
            result=result,
            ai_powered=ai_powered,
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    def get_service_status(self, api_key: Optional[str]) -> dict:
        return {
            "mode": "ai" if api_key else "fallback",
            "classifier": self.classifier.get_service_status(api_key),
        }

# Global detector instance
fake_news_detector = FakeNewsDetector()
