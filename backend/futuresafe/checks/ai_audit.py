import json
import logging
import math
from typing import Awaitable, Callable, List
from futuresafe.models.outcome import Ok, Failed, FailureKind, Outcome
from futuresafe.models.schemas import AIAuditResult, Violation

logger = logging.getLogger(__name__)

Generate = Callable[[str], Awaitable[str]]

TEXT_LIMIT = 15000
SEVERITIES = {"low": "Low", "medium": "Medium", "high": "High", "critical": "Critical"}

UNAVAILABLE = AIAuditResult(score=0, violations=[], summary="Automated legal audit unavailable.")
INSUFFICIENT_CONTENT = AIAuditResult(
    score=0, violations=[],
    summary="Insufficient content to fully verify, but no obvious threats found.",
)

PROMPT_TEMPLATE = """You are a Senior Cyber-Security and Legal Compliance Auditor.
Your goal is to accurately assess the RISK LEVEL of a website based on its content.

CONTEXT:
URL: "{url}" (Infer jurisdiction from TLD if possible, e.g., .in = India, .eu = Europe)

EVALUATION CRITERIA:
1. Universal Trust Indicators:
   - Presence of "Privacy Policy", "Terms of Service", and "Contact Us" (Physical address/Email).
   - Professional language vs. Poor grammar/typos.
2. Key Legal Compliance (strictly enforce based on inferred region):
   - India: IT Rules 2021 (Grievance Officer), DPDP Act (Consent Managers), E-Commerce Rules (Country of Origin).
   - EU/US: GDPR/CCPA (Cookie Consent, Data Rights).
3. Dark Patterns & Risk Flags:
   - False Urgency ("Only 2 minutes left!"), Forced Action, Hidden Costs.
   - High-yield financial promises (Scam indicators).

INPUT TEXT FROM WEBSITE:
"{text}"

TASK:
Return a single JSON object analyzing the risk, with exactly three top-level fields:
"riskScore", "summary" and "violations".
Risk Score Scale (integer 0-100):
0-20: Safe (Legitimate business/site)
21-49: Moderate (Missing some non-critical disclosures)
50-79: Risky (Major compliance failures, suspicious elements)
80-100: Dangerous (Scam, Phishing, Illegal)

OUTPUT FORMAT (JSON ONLY):
{{
  "riskScore": number,
  "summary": "Brief, professional assessment of safety and compliance.",
  "violations": [
    {{
      "act": "Act Name or Standard (e.g., 'Global Trust Standards' or 'IT Rules 2021')",
      "reason": "Specific observed failure.",
      "severity": "High" | "Medium" | "Low"
    }}
  ]
}}
"""


def build_prompt(url: str, text: str) -> str:
    return PROMPT_TEMPLATE.format(url=url, text=text)


def _json_span(raw: str) -> str:
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end < start:
        raise ValueError("no JSON object in response")
    return raw[start:end + 1]


def _violations(items) -> List[Violation]:
    if not isinstance(items, list):
        return []
    out: List[Violation] = []
    for item in items:
        if not isinstance(item, dict):
            continue
        act, reason = item.get("act"), item.get("reason")
        if not isinstance(act, str) or not isinstance(reason, str) or not act.strip() or not reason.strip():
            continue
        severity = SEVERITIES.get(str(item.get("severity", "")).strip().lower(), "Medium")
        out.append(Violation(act=act.strip(), reason=reason.strip(), severity=severity))
    return out


def parse_audit_response(raw: str) -> Outcome:
    """Pull the audit object out of free model text.

    Takes the span from the first ``{`` to the last ``}``. A missing or
    non-numeric ``riskScore`` makes the response malformed; a usable one is
    rounded to the integer the prompt asks for. A missing summary or
    violation list is tolerated.
    """
    if not isinstance(raw, str):
        return Failed(FailureKind.MALFORMED, repr(raw)[:500])
    try:
        data = json.loads(_json_span(raw))
    except ValueError:
        return Failed(FailureKind.MALFORMED, raw[:500])

    if not isinstance(data, dict):
        return Failed(FailureKind.MALFORMED, raw[:500])
    score = data.get("riskScore")
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not math.isfinite(score):
        return Failed(FailureKind.MALFORMED, raw[:500])

    summary = data.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        summary = "Legal scan completed."

    return Ok(AIAuditResult(
        score=min(max(int(round(score)), 0), 100),
        violations=_violations(data.get("violations")),
        summary=summary.strip(),
    ))


class ComplianceAuditor:
    """The only collector that talks to the language model."""
    key = "ai_audit"
    title = "AI Legal Compliance Audit"
    default = UNAVAILABLE

    def __init__(self, generate: Generate, text_limit: int = TEXT_LIMIT):
        self.generate = generate
        self.text_limit = text_limit

    async def run(self, url: str, text: str) -> Outcome:
        clean = (text or "")[:self.text_limit].strip()
        if not clean:
            return Ok(INSUFFICIENT_CONTENT)

        try:
            raw = await self.generate(build_prompt(url, clean))
        except Exception as e:
            # provider errors (auth, rate limit, timeout) surface as arbitrary exception types
            logger.warning("AI legal audit for %s unavailable (provider): %r", url, e)
            return Failed(FailureKind.PROVIDER, repr(e))

        outcome = parse_audit_response(raw)
        if not outcome.ok:
            logger.warning("AI legal audit for %s returned a malformed response", url)
        return outcome
