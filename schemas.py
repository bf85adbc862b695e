from typing import Any, Dict, List, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    FiniteFloat,
    NonNegativeInt,
    StrictInt,
    StrictStr,
)
from pydantic.alias_generators import to_camel

Credibility = Literal["high", "medium", "low"]
Status = Literal["likely-real", "questionable", "likely-fake"]

MIN_TEXT_LENGTH = 10


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Analysis results
class TextAnalysis(CamelModel):
    text_length: int = Field(..., ge=0, description="Whitespace-delimited word count")
    suspicious_keywords: List[str] = Field(default_factory=list, description="Matched suspicion terms")
    reliable_indicators: List[str] = Field(default_factory=list, description="Matched reliability terms")


class AnalysisResult(CamelModel):
    score: int = Field(..., ge=0, le=100, description="Suspicion score (0-100, higher is more suspicious)")
    credibility: Credibility = Field(..., description="Credibility level derived from the score")
    status: Status = Field(..., description="Label paired with the credibility level")
    fake_keywords_found: int = Field(..., ge=0, description="Number of suspicion terms found")
    reliable_indicators_found: int = Field(..., ge=0, description="Number of reliability terms found")
    analysis: TextAnalysis


# Classifier payload, validated strictly: any deviation is a malformed response
class ClassifierAnalysis(CamelModel):
    model_config = ConfigDict(strict=True)

    text_length: NonNegativeInt
    suspicious_keywords: List[StrictStr]
    reliable_indicators: List[StrictStr]


class ClassifierVerdict(CamelModel):
    model_config = ConfigDict(strict=True)

    score: Union[StrictInt, FiniteFloat]
    credibility: Credibility
    status: Status
    fake_keywords_found: NonNegativeInt
    reliable_indicators_found: NonNegativeInt
    analysis: ClassifierAnalysis


# Requests
class DetectRequest(BaseModel):
    text: StrictStr = Field(..., min_length=MIN_TEXT_LENGTH, description="Article text to analyze")


class UpdateCredentialRequest(CamelModel):
    api_key: StrictStr = Field(..., min_length=1, description="Credential for the external classifier")


# Responses
class DetectResponse(CamelModel):
    success: bool = True
    result: AnalysisResult
    ai_powered: bool = Field(..., description="Whether the external classifier produced the result")
    timestamp: str = Field(..., description="ISO-8601 UTC timestamp")


class DatasetsResponse(BaseModel):
    success: bool = True
    data: Dict[str, List[Dict[str, str]]]
    message: str = "CSV data loaded successfully"


class UpdateCredentialResponse(BaseModel):
    success: bool = True
    message: str = "API key updated successfully"


class HealthResponse(BaseModel):
    status: str = Field(..., description="Service status")
    timestamp: str = Field(..., description="Current timestamp")
    services: Dict[str, Any] = Field(..., description="Service health information")
