import asyncio
import logging
from typing import AsyncContextManager, Callable, Optional
from urllib.parse import urlsplit
from futuresafe.core.http import client_for
from futuresafe.core.verdict import fuse, failed_report
from futuresafe.models.schemas import ScanReport
from futuresafe.checks.ai_audit import ComplianceAuditor, Generate, TEXT_LIMIT
from futuresafe.checks.domain_age import DomainAgeCheck
from futuresafe.checks.heuristics import heuristic_scan
from futuresafe.checks.phishing import PhishingCheck

logger = logging.getLogger(__name__)


def _require_url(url: str) -> None:
    if not isinstance(url, str):
        raise ValueError(f"URL must be a string, got {type(url).__name__}")
    parts = urlsplit(url)
    if parts.scheme.lower() not in ("http", "https") or not parts.hostname:
        raise ValueError(f"not an absolute http(s) URL: {url!r}")


class RiskEngine:
    """Fan out to the collectors, fan in to the verdict fuser.

    Holds only its collaborators; every scan builds its own signals, so one
    engine can serve concurrent requests.
    """

    def __init__(self, generate: Generate, phishing: Optional[PhishingCheck] = None,
                 domain_age: Optional[DomainAgeCheck] = None, text_limit: int = TEXT_LIMIT,
                 client_factory: Callable[[], AsyncContextManager] = client_for):
        self.phishing = phishing or PhishingCheck()
        self.domain_age = domain_age or DomainAgeCheck()
        self.auditor = ComplianceAuditor(generate, text_limit=text_limit)
        self.client_factory = client_factory

    async def scan(self, url: str, page_text: str = "") -> ScanReport:
        try:
            _require_url(url)
        except ValueError as e:
            logger.warning("Rejected scan request: %s", e)
            return failed_report(url)

        try:
            page_text = page_text or ""
            async with self.client_factory() as client:
                phishing, age, audit = await asyncio.gather(
                    self.phishing.run(client, url),
                    self.domain_age.run(client, url),
                    self.auditor.run(url, page_text),
                )

            collectors = ((self.phishing, phishing), (self.domain_age, age), (self.auditor, audit))
            unavailable = [c.key for c, outcome in collectors if not outcome.ok]

            report = fuse(
                url=url,
                phishing_flag=phishing.resolve(self.phishing.default),
                domain_age=age.resolve(self.domain_age.default),
                heuristic=heuristic_scan(page_text, url),
                audit=audit.resolve(self.auditor.default),
                unavailable=unavailable,
            )
        except Exception:
            logger.exception("Risk engine failure for %s", url)
            return failed_report(url)

        logger.info("Scanned %s: score=%s verdict=%s", url, report.risk_score, report.verdict)
        return report
