"""
Verdict fusion.

Combines the collector signals into one ScanReport. The blend below is a
tuned policy, not a derived model: AI and heuristic scores are averaged
60/40, but neither source can be averaged below its own alarm level
(heuristic floor, AI override above 80). Transport and domain-age
penalties are flat additions applied afterwards, then the score is
clamped to 100 before it is mapped to a verdict band.
"""
from typing import Iterable, List, Sequence
from urllib.parse import urlsplit
from futuresafe.models.schemas import (
    AIAuditResult, DomainAge, HeuristicResult, ScanDetails, ScanReport, Violation,
)

AI_WEIGHT = 0.6
HEURISTIC_WEIGHT = 0.4
AI_OVERRIDE_ABOVE = 80
HTTP_PENALTY = 15
NEW_DOMAIN_PENALTY = 20
NEW_DOMAIN_DAYS = 30

PHISHING_VIOLATION = Violation(
    act="IT Act, 2000 (Section 66D)",
    reason="Detected in global phishing database (Cheating by personation).",
    severity="Critical",
)

# (lower bound, verdict), highest first
BANDS = ((80, "DANGEROUS"), (50, "RISKY"), (20, "MODERATE"))


def verdict_for(score: float) -> str:
    for floor, verdict in BANDS:
        if score >= floor:
            return verdict
    return "SAFE"


def dedupe(violations: Iterable[Violation]) -> List[Violation]:
    """Drop repeats of the same (act, reason); the first occurrence wins."""
    seen = set()
    unique: List[Violation] = []
    for v in violations:
        if v.key in seen:
            continue
        seen.add(v.key)
        unique.append(v)
    return unique


def is_insecure(url: str) -> bool:
    return urlsplit(url).scheme.lower() != "https"


def fuse(url: str, phishing_flag: bool, domain_age: DomainAge,
         heuristic: HeuristicResult, audit: AIAuditResult,
         unavailable: Sequence[str] = ()) -> ScanReport:
    ai_score = audit.score
    heuristic_score = heuristic.score_impact
    alerts: List[str] = []

    score = AI_WEIGHT * ai_score + HEURISTIC_WEIGHT * heuristic_score
    score = max(score, heuristic_score)
    if ai_score > AI_OVERRIDE_ABOVE:
        score = max(score, ai_score)

    leading: List[Violation] = []
    if phishing_flag:
        score = 100
        leading.append(PHISHING_VIOLATION)

    if is_insecure(url):
        score += HTTP_PENALTY
        alerts.append("Unsecured HTTP connection (Data privacy risk)")

    if domain_age != "unknown" and domain_age < NEW_DOMAIN_DAYS:
        score += NEW_DOMAIN_PENALTY
        alerts.append(f"Newly registered domain ({int(domain_age)} days old). High scam potential.")

    violations = dedupe(leading + list(heuristic.violations) + list(audit.violations))

    score = max(min(score, 100), 0)
    verdict = verdict_for(score)
    issues = [f"{v.act}: {v.reason}" for v in violations]

    return ScanReport(
        url=url,
        risk_score=round(score, 2),
        verdict=verdict,
        violations=violations,
        summary=audit.summary or "Scan complete.",
        issues=issues + alerts,
        alerts=alerts,
        details=ScanDetails(
            phishing_flag=phishing_flag,
            domain_age_days=domain_age,
            ai_score=ai_score,
            unavailable=list(unavailable),
        ),
    )


def failed_report(url: str) -> ScanReport:
    return ScanReport(
        url=url,
        risk_score=0,
        verdict="SAFE",
        violations=[],
        summary="System error during analysis. Proceed with caution.",
        issues=["Scan failed"],
    )
