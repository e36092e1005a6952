import logging
from typing import Optional
from urllib.parse import urlsplit
import httpx
from futuresafe.models.outcome import Ok, Failed, FailureKind, Outcome

logger = logging.getLogger(__name__)

PHISHTANK_URL = "https://checkurl.phishtank.com/checkurl/"


def _valid_url(url: str) -> bool:
    parts = urlsplit(url)
    return parts.scheme in ("http", "https") and bool(parts.hostname)


class PhishingCheck:
    """Known-phishing lookup against the PhishTank checkurl API.

    Flagged only when PhishTank reports the URL both in its database and
    verified. One attempt, no retry.
    """
    key = "phishing"
    title = "Phishing Database Lookup"
    default = False

    def __init__(self, endpoint: str = PHISHTANK_URL, app_key: Optional[str] = None):
        self.endpoint = endpoint
        self.app_key = app_key

    def _failed(self, url: str, kind: FailureKind, detail: str) -> Failed:
        logger.warning("Phishing lookup for %s fell back to not-flagged (%s): %s", url, kind.value, detail)
        return Failed(kind, detail)

    async def run(self, client: httpx.AsyncClient, url: str) -> Outcome:
        if not _valid_url(url):
            return self._failed(url, FailureKind.INVALID_INPUT, "not an absolute http(s) URL")

        form = {"url": url, "format": "json"}
        if self.app_key:
            form["app_key"] = self.app_key

        try:
            resp = await client.post(self.endpoint, data=form)
        except httpx.TimeoutException as e:
            return self._failed(url, FailureKind.TIMEOUT, repr(e))
        except httpx.HTTPError as e:
            return self._failed(url, FailureKind.NETWORK, repr(e))

        if resp.status_code >= 400:
            return self._failed(url, FailureKind.PROVIDER, f"HTTP {resp.status_code}")

        try:
            data = resp.json()
        except ValueError as e:
            return self._failed(url, FailureKind.MALFORMED, repr(e))

        results = data.get("results") if isinstance(data, dict) else None
        if not isinstance(results, dict):
            return self._failed(url, FailureKind.MALFORMED, "response has no 'results' object")

        flagged = results.get("in_database") is True and results.get("verified") is True
        if flagged:
            logger.info("Phishing database hit for %s", url)
        return Ok(flagged)
