from typing import Annotated, Literal, List, Optional, Union
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, HttpUrl, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

Severity = Literal["Low", "Medium", "High", "Critical"]
Verdict = Literal["SAFE", "MODERATE", "RISKY", "DANGEROUS"]
DomainAge = Union[int, Literal["unknown"]]

_HTTP_URL = TypeAdapter(HttpUrl)


def _checked_url(value: str) -> str:
    # validate as HttpUrl but hand back the caller's string untouched
    try:
        _HTTP_URL.validate_python(value)
    except ValidationError:
        raise ValueError("must be an absolute http(s) URL")
    return value


CheckedUrl = Annotated[str, AfterValidator(_checked_url)]


class _Model(BaseModel):
    # camelCase on the wire, snake_case in Python
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Violation(_Model):
    act: str
    reason: str
    severity: Severity

    @property
    def key(self) -> tuple:
        return (self.act, self.reason)


class HeuristicResult(_Model):
    violations: List[Violation] = Field(default_factory=list)
    score_impact: int = 0


class AIAuditResult(_Model):
    score: int = 0
    violations: List[Violation] = Field(default_factory=list)
    summary: str


class ScanDetails(_Model):
    phishing_flag: bool = False
    domain_age_days: DomainAge = "unknown"
    ai_score: int = 0
    unavailable: List[str] = Field(default_factory=list)  # collectors that fell back to defaults


class ScanReport(_Model):
    url: str
    risk_score: float = 0
    verdict: Verdict = "SAFE"
    violations: List[Violation] = Field(default_factory=list)
    summary: str = ""
    issues: List[str] = Field(default_factory=list)
    alerts: List[str] = Field(default_factory=list)
    details: ScanDetails = Field(default_factory=ScanDetails)


class ScanRequest(_Model):
    url: CheckedUrl
    page_text: str = ""


class ChatRequest(_Model):
    message: str = ""
    url: Optional[CheckedUrl] = None
    page_text: str = ""


class ChatReply(_Model):
    reply: str
