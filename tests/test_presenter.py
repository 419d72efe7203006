import datetime

import pytest

from sitewatch.checker import ProbeResult, Snapshot
from sitewatch.presenter import build_view, count_up, display_host, split_by_status, time_ago, up_summary
from sitewatch.ui import render_board, render_page

A_UP = ProbeResult("https://a.test", "up", 200)
B_DOWN = ProbeResult("https://b.test", "down", 503)
C_UP = ProbeResult("https://c.test", "up", 204)
TS = datetime.datetime(2024, 5, 1, 12, 0, 0, tzinfo=datetime.timezone.utc)


@pytest.mark.parametrize("seconds, expected", [
    (0, "0s ago"),
    (45, "45s ago"),
    (59.9, "59s ago"),
    (60, "1m ago"),
    (125, "2m ago"),
    (3599, "59m ago"),
    (7300, "2h ago"),
    (86399, "23h ago"),
    (100000, "1d ago"),
    (-3, "0s ago"),
])
def test_time_ago(seconds, expected):
    assert time_ago(seconds) == expected


def test_split_keeps_relative_order():
    up, down = split_by_status([A_UP, B_DOWN, C_UP])
    assert up == [A_UP, C_UP]
    assert down == [B_DOWN]


def test_up_summary():
    assert count_up([A_UP, B_DOWN, C_UP]) == 2
    assert up_summary([A_UP, B_DOWN, C_UP]) == "2/3 up"
    assert up_summary([]) == "0/0 up"


def test_display_host_strips_scheme():
    assert display_host("https://foodfly.co") == "foodfly.co"
    assert display_host("http://orbitx.zone/x") == "orbitx.zone/x"


def test_view_before_first_check():
    view = build_view(None, checking=True)
    assert view["last_checked"] == "Loading..."
    assert view["groups"] == []
    assert 'data-checking="true"' in render_board(view)
    assert "Checking site statuses..." in render_board(view)


def test_view_from_snapshot():
    snap = Snapshot({"server1": (A_UP, B_DOWN, C_UP), "server2": (B_DOWN,)}, TS)
    view = build_view(snap, checking=False, now=TS + datetime.timedelta(seconds=125))
    assert view["last_checked"] == "Last checked: 2m ago"
    s1, s2 = view["groups"]
    assert (s1["title"], s1["summary"]) == ("Server 1", "2/3 up")
    assert (s2["title"], s2["summary"]) == ("Server 2", "0/1 up")


def test_board_renders_up_divider_down():
    snap = Snapshot({"server1": (A_UP, B_DOWN, C_UP)}, TS)
    html = render_board(build_view(snap, checking=False, now=TS))
    a, c, divider, b = (html.index(s) for s in ("a.test", "c.test", "status-divider", "b.test"))
    assert a < c < divider < b
    assert ">503<" in html


def test_divider_omitted_when_all_up():
    snap = Snapshot({"server1": (A_UP, C_UP)}, TS)
    html = render_board(build_view(snap, checking=False, now=TS))
    assert "status-divider" not in html
    assert "2/2 up" in html


def test_page_embeds_board():
    html = render_page(build_view(None, checking=False))
    assert '<div id="board"' in html
    assert "{{BOARD}}" not in html
