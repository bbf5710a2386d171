"""
Breach lookup using the k-anonymity range protocol.

Only the first five hex characters of the SHA-1 digest leave the machine. The
service answers with every known suffix under that prefix, and the match is
made locally. ``Add-Padding`` asks the service to pad the listing with fake
zero-count records so the response size does not reveal the prefix bucket.

``BreachChecker.check`` never raises for network or protocol problems; they
become ``BreachState.ERROR``. ``BreachMonitor`` layers the debounced,
cancellable state machine on top: each new credential cancels the lookup in
flight, and only the latest credential's result is ever applied.
"""

from __future__ import annotations

import asyncio
import enum
import hashlib
import string
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

import httpx
import structlog

from .config import get_settings
from .errors import BreachNetworkError, BreachResponseError

logger = structlog.get_logger(__name__)

PREFIX_LENGTH = 5
SUFFIX_LENGTH = 35


class BreachState(str, enum.Enum):
    IDLE = "idle"
    CHECKING = "checking"
    SAFE = "safe"
    COMPROMISED = "compromised"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class BreachResult:
    state: BreachState
    count: int = 0

    @classmethod
    def idle(cls) -> BreachResult:
        return cls(BreachState.IDLE)

    @classmethod
    def checking(cls) -> BreachResult:
        return cls(BreachState.CHECKING)

    @classmethod
    def safe(cls) -> BreachResult:
        return cls(BreachState.SAFE)

    @classmethod
    def compromised(cls, count: int) -> BreachResult:
        return cls(BreachState.COMPROMISED, count)

    @classmethod
    def error(cls) -> BreachResult:
        return cls(BreachState.ERROR)


# Uppercase hex SHA-1 of the UTF-8 bytes, as the range service expects
def sha1_hex(value: str) -> str:
    return hashlib.sha1(value.encode("utf-8")).hexdigest().upper()


def split_digest(digest: str) -> Tuple[str, str]:
    return digest[:PREFIX_LENGTH], digest[PREFIX_LENGTH:]


def parse_range_response(body: str) -> Dict[str, int]:
    """
    Parse a range listing into ``{suffix: count}``.

    Each non-blank line must look like ``<35 hex chars>:<decimal count>``.
    Anything else raises ``BreachResponseError``.
    """
    records: Dict[str, int] = {}
    for line in body.splitlines():
        line = line.strip()
        if not line:
            continue
        suffix, sep, count = line.partition(":")
        if not sep or len(suffix) != SUFFIX_LENGTH or not all(c in string.hexdigits for c in suffix):
            raise BreachResponseError(f"malformed range record: {line[:16]!r}")
        # isdigit alone would accept non-ASCII digits such as "²"
        if not (count.isascii() and count.isdigit()):
            raise BreachResponseError(f"malformed breach count: {count[:16]!r}")
        records[suffix.upper()] = int(count)
    return records


# Match a suffix in a range listing; padding records carry a zero count
def lookup(body: str, suffix: str) -> BreachResult:
    count = parse_range_response(body).get(suffix.upper(), 0)
    if count > 0:
        return BreachResult.compromised(count)
    return BreachResult.safe()


class BreachChecker:
    """
    Client for the range-lookup service.

    An ``httpx.AsyncClient`` may be injected; otherwise one is created and
    closed by ``aclose``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.breach_api_url).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout if timeout is not None else settings.breach_timeout
        )

    async def __aenter__(self) -> BreachChecker:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch_range(self, prefix: str) -> str:
        url = f"{self.base_url}/range/{prefix}"
        headers = {
            "Add-Padding": "true",
            "Cache-Control": "no-cache, no-store",
            "Pragma": "no-cache",
        }
        try:
            response = await self._client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            raise BreachNetworkError(f"range request failed: {exc}") from exc
        if not response.is_success:
            raise BreachNetworkError(f"range request returned HTTP {response.status_code}")
        return response.text

    async def check(self, credential: str) -> BreachResult:
        try:
            prefix, suffix = split_digest(sha1_hex(credential))
        except UnicodeEncodeError:
            # Lone surrogates, e.g. from undecodable argv bytes, have no UTF-8 form
            logger.warning("breach_check_failed", error="credential is not encodable as UTF-8")
            return BreachResult.error()
        logger.info("breach_check_started", prefix=prefix)
        try:
            body = await self.fetch_range(prefix)
            result = lookup(body, suffix)
        except BreachNetworkError as exc:
            logger.warning("breach_check_failed", prefix=prefix, error=str(exc))
            return BreachResult.error()
        logger.info("breach_check_finished", prefix=prefix, state=result.state.value)
        return result


class BreachMonitor:
    """
    Debounced breach status for a changing credential.

    ``update`` must be called from within a running event loop. Each call
    supersedes the previous one: its task is cancelled and its result, should
    it still arrive, is dropped.
    """

    def __init__(
        self,
        checker: BreachChecker,
        enabled: bool = True,
        debounce: float | None = None,
        on_change: Callable[[BreachResult], None] | None = None,
    ):
        self.checker = checker
        self.enabled = enabled
        self.debounce = get_settings().breach_debounce if debounce is None else debounce
        self.on_change = on_change
        self._status = BreachResult.idle()
        self._task: asyncio.Task | None = None
        self._generation = 0
        self._credential: str | None = None

    @property
    def status(self) -> BreachResult:
        return self._status

    def _set(self, result: BreachResult) -> None:
        self._status = result
        if self.on_change is not None:
            self.on_change(result)

    def _cancel(self) -> None:
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def update(self, credential: str | None) -> None:
        self._credential = credential
        self._cancel()
        if not self.enabled or not credential:
            self._set(BreachResult.idle())
            return
        self._set(BreachResult.checking())
        self._task = asyncio.get_running_loop().create_task(
            self._run(self._generation, credential)
        )

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled
        self.update(self._credential)

    async def _run(self, generation: int, credential: str) -> None:
        try:
            await asyncio.sleep(self.debounce)
            result = await self.checker.check(credential)
        except asyncio.CancelledError:
            logger.debug("breach_check_cancelled")
            raise
        if generation == self._generation:
            self._set(result)

    async def wait(self) -> BreachResult:
        """Wait until no lookup is pending, following any superseding update, and return the status."""
        task = self._task
        while task is not None:
            # asyncio.wait neither raises for a superseded task nor cancels it
            await asyncio.wait({task})
            if self._task is task:
                break
            task = self._task
        return self._status

    async def aclose(self) -> None:
        task = self._task
        self._cancel()
        if task is not None:
            await asyncio.wait({task})
