import httpx
from contextlib import asynccontextmanager
from futuresafe.core.config import get_settings

DEFAULT_UA = (
    "FutureSafeScanner/0.1 (+https://example.local) "
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

HEADERS = {"User-Agent": DEFAULT_UA, "Accept": "*/*"}


def timeout_for(seconds: float) -> httpx.Timeout:
    return httpx.Timeout(seconds, connect=min(5.0, seconds))


@asynccontextmanager
async def client_for(timeout: float = None):
    seconds = timeout if timeout is not None else get_settings().http_timeout
    async with httpx.AsyncClient(
        timeout=timeout_for(seconds),
        headers=HEADERS,
        follow_redirects=True,
        http2=True,
        verify=True,
    ) as client:
        yield client
