import asyncio, time, json, logging, datetime
from dataclasses import dataclass
from typing import Dict, Any, List, Mapping, Optional, Sequence, Tuple
from urllib.parse import urlparse
import httpx
from .config import settings

logger = logging.getLogger(__name__)

UP = "up"
DOWN = "down"


class CheckFailed(Exception):
    """The check cycle as a whole could not produce a snapshot."""


def host_of(url: str) -> str:
    return urlparse(url).netloc


@dataclass(frozen=True)
class ProbeResult:
    url: str
    status: str
    status_code: Optional[int] = None

    @property
    def is_up(self) -> bool:
        return self.status == UP

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"url": self.url, "status": self.status}
        if self.status_code is not None:
            out["statusCode"] = self.status_code
        return out


@dataclass(frozen=True)
class Snapshot:
    groups: Dict[str, Tuple[ProbeResult, ...]]
    timestamp: datetime.datetime

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            name: [r.to_dict() for r in results] for name, results in self.groups.items()
        }
        out["timestamp"] = self.timestamp.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return out


def make_client() -> httpx.AsyncClient:
    limits = httpx.Limits(max_connections=settings.MAX_CONNECTIONS,
                          max_keepalive_connections=settings.MAX_CONNECTIONS)
    return httpx.AsyncClient(limits=limits, headers={"User-Agent": settings.UA})


async def probe(client: httpx.AsyncClient, url: str, timeout: float) -> ProbeResult:
    """HEAD one site and classify it.

    Any exception on the way (timeout, DNS, refused connection, TLS) means the
    site is down with no status code recorded.
    """
    started = time.monotonic()
    code, err = None, None
    try:
        # wait_for cancels the in-flight request when the ceiling is hit
        r = await asyncio.wait_for(
            client.request("HEAD", url, follow_redirects=True, timeout=timeout),
            timeout,
        )
        code = r.status_code
        result = ProbeResult(url, UP if r.is_success else DOWN, code)
    except asyncio.TimeoutError:
        err = "timeout"
        result = ProbeResult(url, DOWN)
    except Exception as e:
        err = str(e) or type(e).__name__
        result = ProbeResult(url, DOWN)

    logger.info(json.dumps({
        "status": result.status,
        "http": code,
        "elapsed_ms": int((time.monotonic() - started) * 1000),
        "error": err,
        "host": host_of(url),
        "url": url,
    }))
    return result


def _assemble(groups: Mapping[str, Sequence[str]],
              results: List[ProbeResult]) -> Dict[str, Tuple[ProbeResult, ...]]:
    by_url = {r.url: r for r in results}
    return {
        name: tuple(by_url.get(url, ProbeResult(url, DOWN)) for url in urls)
        for name, urls in groups.items()
    }


async def check_sites(groups: Mapping[str, Sequence[str]],
                      timeout: Optional[float] = None) -> Snapshot:
    """Probe every site of every group concurrently and join the results.

    The returned snapshot keeps each group in declaration order whatever the
    completion order was. Per-site failures are folded into ``down``; only a
    failure of the cycle itself raises ``CheckFailed``.
    """
    timeout = settings.PROBE_TIMEOUT_S if timeout is None else timeout
    urls = [url for group in groups.values() for url in group]
    try:
        async with make_client() as client:
            results = await asyncio.gather(*(probe(client, url, timeout) for url in urls))
    except Exception as e:
        raise CheckFailed("Failed to check site statuses") from e

    snapshot = Snapshot(_assemble(groups, list(results)),
                        datetime.datetime.now(datetime.timezone.utc))
    up = sum(r.is_up for group in snapshot.groups.values() for r in group)
    logger.info(f"Check cycle complete: {up}/{len(urls)} up")
    return snapshot
