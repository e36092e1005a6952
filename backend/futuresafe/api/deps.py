from functools import lru_cache
from futuresafe.checks.domain_age import DomainAgeCheck
from futuresafe.checks.phishing import PhishingCheck
from futuresafe.core.config import get_settings
from futuresafe.core.engine import RiskEngine
from futuresafe.core.llm import CompletionClient


@lru_cache
def get_generator() -> CompletionClient:
    return CompletionClient.from_settings(get_settings())


@lru_cache
def get_engine() -> RiskEngine:
    settings = get_settings()
    return RiskEngine(
        generate=get_generator(),
        phishing=PhishingCheck(settings.phishtank_url, settings.phishtank_app_key),
        domain_age=DomainAgeCheck(timeout=settings.whois_timeout),
        text_limit=settings.ai_text_limit,
    )
