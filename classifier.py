import asyncio
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError

from config import settings
from logger import get_logger
from schemas import ClassifierVerdict

log = get_logger("classifier")

SYSTEM_PROMPT = "You are an expert fact-checker and journalist who specializes in detecting fake news."

PROMPT_TEMPLATE = """
Analyze the following news article for credibility and determine if it might be fake news.

Article: "{text}"

Provide a detailed analysis with the following:
1. Suspicion score (0-100, where 0 is definitely credible and 100 is definitely fake)
2. Credibility level (low, medium, or high)
3. Status (likely-fake, questionable, or likely-real)
4. List of suspicious elements or red flags (if any)
5. List of credibility indicators (if any)
6. Word count

Format your response as a JSON object with the following structure:
{{
  "score": number,
  "credibility": "low" | "medium" | "high",
  "status": "likely-fake" | "questionable" | "likely-real",
  "fakeKeywordsFound": number,
  "reliableIndicatorsFound": number,
  "analysis": {{
    "textLength": number,
    "suspiciousKeywords": string[],
    "reliableIndicators": string[]
  }}
}}

Only respond with the JSON object, no other text.
"""


class ClassifierError(Exception):
    """The external classifier failed or returned something unusable."""


class LLMClassifier:
    """Credibility classification through an OpenAI-compatible chat completions API."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.OPENAI_BASE_URL).rstrip("/")
        self.model = model or settings.OPENAI_MODEL
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS
        self._transport = transport
        self.http_client = None
        self._session_lock = asyncio.Lock()

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with timeout."""
        if not self.http_client:
            async with self._session_lock:
                if not self.http_client:
                    self.http_client = httpx.AsyncClient(
                        base_url=self.base_url,
                        timeout=self.timeout,
                        transport=self._transport,
                        headers={
                            "User-Agent": "FakeNewsDetector/1.0",
                            "Accept": "application/json",
                        },
                    )
        return self.http_client

    async def close(self):
        """Close HTTP client."""
        if self.http_client:
            await self.http_client.aclose()
            self.http_client = None

    def _build_payload(self, text: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": PROMPT_TEMPLATE.format(text=text)},
            ],
            "response_format": {"type": "json_object"},
        }

    async def classify(self, text: str, api_key: str) -> ClassifierVerdict:
        """Classify ``text``; raises ClassifierError on any failure."""
        if not api_key:
            raise ClassifierError("No API key configured")

        client = await self._get_http_client()
        try:
            response = await client.post(
                "/chat/completions",
                json=self._build_payload(text),
                headers={"Authorization": f"Bearer {api_key}"},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise ClassifierError(f"Request timed out after {self.timeout}s") from e
        except httpx.HTTPStatusError as e:
            raise ClassifierError(f"API returned status {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise ClassifierError(f"Request failed: {e}") from e
        except ValueError as e:
            raise ClassifierError("Response body is not JSON") from e

        content = self._extract_content(data)
        try:
            return ClassifierVerdict.model_validate_json(content)
        except ValidationError as e:
            log.debug("Rejected classifier content: {}", content[:500])
            raise ClassifierError(
                f"Invalid result structure ({e.error_count()} errors)"
            ) from e

    def _extract_content(self, data: Any) -> str:
        """Pull ``choices[0].message.content`` out of a chat completion."""
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ClassifierError("Invalid response structure") from e

        if not isinstance(content, str) or not content.strip():
            raise ClassifierError("Empty content in response")
        return content

    def get_service_status(self, api_key: Optional[str]) -> Dict[str, Any]:
        """Get status of the classifier service."""
        return {
            "available": bool(api_key),
            "api_key_configured": bool(api_key),
            "model": self.model,
            "base_url": self.base_url,
            "timeout_seconds": self.timeout,
        }


# Global classifier instance
llm_classifier = LLMClassifier()
