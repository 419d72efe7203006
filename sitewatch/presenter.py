import datetime
from typing import Dict, Any, List, Optional, Sequence, Tuple
from .checker import ProbeResult, Snapshot
from .sites import GROUP_TITLES


def split_by_status(results: Sequence[ProbeResult]) -> Tuple[List[ProbeResult], List[ProbeResult]]:
    """Up entries and down entries, each in their original relative order."""
    up = [r for r in results if r.is_up]
    down = [r for r in results if not r.is_up]
    return up, down


def count_up(results: Sequence[ProbeResult]) -> int:
    return sum(1 for r in results if r.is_up)


def up_summary(results: Sequence[ProbeResult]) -> str:
    return f"{count_up(results)}/{len(results)} up"


def time_ago(seconds: float) -> str:
    seconds = max(int(seconds), 0)
    if seconds < 60:
        return f"{seconds}s ago"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    return f"{hours // 24}d ago"


def display_host(url: str) -> str:
    return url.replace("https://", "").replace("http://", "")


def group_view(name: str, results: Sequence[ProbeResult]) -> Dict[str, Any]:
    up, down = split_by_status(results)
    return {
        "name": name,
        "title": GROUP_TITLES.get(name, name),
        "summary": up_summary(results),
        "up": up,
        "down": down,
    }


def build_view(snapshot: Optional[Snapshot], checking: bool,
               now: Optional[datetime.datetime] = None) -> Dict[str, Any]:
    """Everything the board template needs, derived from the held snapshot."""
    if snapshot is None:
        return {"checking": checking, "last_checked": "Loading...", "groups": []}

    now = now or datetime.datetime.now(datetime.timezone.utc)
    elapsed = (now - snapshot.timestamp).total_seconds()
    return {
        "checking": checking,
        "last_checked": f"Last checked: {time_ago(elapsed)}",
        "groups": [group_view(name, results) for name, results in snapshot.groups.items()],
    }
