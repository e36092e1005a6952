from typing import Iterable, List
from urllib.parse import urlsplit
from futuresafe.models.schemas import HeuristicResult, Violation

PRIVACY_TERMS = ("privacy policy", "privacy notice")
TERMS_TERMS = ("terms of use", "terms of service", "terms & conditions", "terms and conditions")
CONTACT_TERMS = ("contact us", "support", "about us", "help")

# Indian jurisdiction markers: TLD, currency, country and major city names
REGIONAL_TLD = ".in"
REGIONAL_TERMS = ("rupee", "india", "delhi", "mumbai", "bangalore")
GRIEVANCE_TERMS = ("grievance", "nodal officer", "compliance officer")
ADDRESS_TERMS = ("registered address", "corporate office", "building", "floor")


def _mentions(text: str, phrases: Iterable[str]) -> bool:
    return any(p in text for p in phrases)


def is_regional_context(text_lower: str, url: str) -> bool:
    host = (urlsplit(url).hostname or "").lower()
    return host.endswith(REGIONAL_TLD) or _mentions(text_lower, REGIONAL_TERMS)


def heuristic_scan(text: str, url: str) -> HeuristicResult:
    """Keyword checks for missing compliance disclosures.

    Empty text fails every check on purpose: a page that exposes no
    disclosures at all is itself a transparency failure.
    """
    text_lower = (text or "").lower()
    violations: List[Violation] = []
    impact = 0

    has_contact = _mentions(text_lower, CONTACT_TERMS)

    if not _mentions(text_lower, PRIVACY_TERMS):
        violations.append(Violation(
            act="Global Data Protection Principles",
            reason="Missing 'Privacy Policy'. This is a critical transparency failure for any legitimate site.",
            severity="High",
        ))
        impact += 20

    if not _mentions(text_lower, TERMS_TERMS):
        violations.append(Violation(
            act="Consumer Transparency",
            reason="Missing 'Terms of Service/Use'. Users cannot know their rights.",
            severity="Medium",
        ))
        impact += 10

    if not has_contact:
        violations.append(Violation(
            act="Trust & Credibility",
            reason="No obvious 'Contact' or 'Support' section found.",
            severity="Low",
        ))
        impact += 10

    if is_regional_context(text_lower, url):
        if not _mentions(text_lower, GRIEVANCE_TERMS):
            violations.append(Violation(
                act="IT Rules, 2021 (India)",
                reason="Mandatory 'Grievance Officer' details are missing.",
                severity="High",
            ))
            impact += 25

        if not _mentions(text_lower, ADDRESS_TERMS) and not has_contact:
            violations.append(Violation(
                act="Consumer Protection Rules, 2020",
                reason="No physical contact address or clear contact mechanism found.",
                severity="Medium",
            ))
            impact += 20

    return HeuristicResult(violations=violations, score_impact=impact)
