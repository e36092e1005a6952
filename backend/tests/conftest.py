import asyncio
from contextlib import asynccontextmanager
import pytest
from futuresafe.models.outcome import Ok, Failed, FailureKind


class StubCheck:
    """Collector stand-in returning a fixed outcome."""

    def __init__(self, key, default, outcome):
        self.key = key
        self.default = default
        self.outcome = outcome
        self.calls = []

    async def run(self, client, url):
        self.calls.append(url)
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome


class FakeGenerate:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    async def __call__(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@asynccontextmanager
async def null_client():
    yield None


@pytest.fixture
def phishing_clean():
    return StubCheck("phishing", False, Ok(False))


@pytest.fixture
def age_known():
    return StubCheck("domain_age", "unknown", Ok(500))


@pytest.fixture
def age_unknown():
    return StubCheck("domain_age", "unknown", Failed(FailureKind.NO_DATA, "no creation date"))


class Gate:
    """Opens only once every expected caller is waiting at the same time."""

    def __init__(self, expected, timeout=1.0):
        self.expected = expected
        self.timeout = timeout
        self.arrived = 0
        self._open = asyncio.Event()

    async def pass_through(self):
        self.arrived += 1
        if self.arrived >= self.expected:
            self._open.set()
        await asyncio.wait_for(self._open.wait(), self.timeout)


class GatedCheck(StubCheck):
    def __init__(self, key, default, outcome, gate):
        super().__init__(key, default, outcome)
        self.gate = gate

    async def run(self, client, url):
        await self.gate.pass_through()
        return await super().run(client, url)


class GatedGenerate(FakeGenerate):
    def __init__(self, reply, gate):
        super().__init__(reply=reply)
        self.gate = gate

    async def __call__(self, prompt):
        await self.gate.pass_through()
        return await super().__call__(prompt)
