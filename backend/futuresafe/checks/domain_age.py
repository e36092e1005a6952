import asyncio
import logging
from datetime import date, datetime, timezone
from typing import Callable, Optional
from urllib.parse import urlsplit
import whois
from futuresafe.models.outcome import Ok, Failed, FailureKind, Outcome

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _creation_date(info) -> Optional[datetime]:
    if isinstance(info, dict):
        created = info.get("creation_date")
    else:
        created = getattr(info, "creation_date", None)
    # registrars that report several dates give a list; the earliest is the registration
    if isinstance(created, (list, tuple)):
        dates = [d for d in created if isinstance(d, (datetime, date))]
        created = min(dates, key=_as_aware) if dates else None
    if isinstance(created, (datetime, date)):
        return _as_aware(created)
    return None


def _as_aware(value) -> datetime:
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class DomainAgeCheck:
    """Days since the hostname's WHOIS creation date.

    python-whois is blocking, so the lookup runs in a worker thread under
    an explicit timeout.
    """
    key = "domain_age"
    title = "Domain Registration Age"
    default = UNKNOWN

    def __init__(self, lookup: Callable = whois.whois, timeout: float = 10.0,
                 clock: Callable[[], datetime] = _utcnow):
        self.lookup = lookup
        self.timeout = timeout
        self.clock = clock

    def _failed(self, host: str, kind: FailureKind, detail: str) -> Failed:
        logger.warning("Domain age for %s is unknown (%s): %s", host, kind.value, detail)
        return Failed(kind, detail)

    async def run(self, client, url: str) -> Outcome:
        host = urlsplit(url).hostname
        if not host:
            return self._failed(url, FailureKind.INVALID_INPUT, "URL has no hostname")

        try:
            info = await asyncio.wait_for(asyncio.to_thread(self.lookup, host), timeout=self.timeout)
        except asyncio.TimeoutError:
            return self._failed(host, FailureKind.TIMEOUT, f"no WHOIS answer within {self.timeout}s")
        except Exception as e:
            # python-whois raises its own parser/lookup errors as well as OSError
            return self._failed(host, FailureKind.NETWORK, repr(e))

        created = _creation_date(info)
        if created is None:
            return self._failed(host, FailureKind.NO_DATA, "no creation date in WHOIS record")

        days = (self.clock() - created).days
        return Ok(max(days, 0))
