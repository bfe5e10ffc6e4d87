"""Tests for the embeddable graph session."""

from __future__ import annotations

import pytest

from docgraph.models import GraphConfig, GraphMode, NodeRole
from docgraph.session import GraphSession
from docgraph.tree import DEFAULT_TREE


class ManualScheduler:
    def __init__(self) -> None:
        self.pending = []

    def call_later(self, delay, callback) -> None:
        self.pending.append(callback)

    def run_all(self) -> None:
        pending, self.pending = self.pending, []
        for callback in pending:
            callback()


def _session(**kwargs) -> GraphSession:
    kwargs.setdefault("scheduler", ManualScheduler())
    return GraphSession(DEFAULT_TREE, **kwargs)


def _node(snapshot, node_id):
    return next(n for n in snapshot.nodes if n.id == node_id)


class TestFocus:
    def test_current_path_is_focus(self):
        snap = _session(current_path="user-guide/chatbot").snapshot()
        assert snap.mode is GraphMode.focus
        assert snap.focus_id == "user-guide/chatbot"
        chatbot = _node(snap, "user-guide/chatbot")
        assert (chatbot.position.x, chatbot.position.y) == (400, 300)
        assert chatbot.role is NodeRole.current
        assert chatbot.radius == 8

    def test_visible_set_follows_focus(self):
        snap = _session(current_path="getting-started/installation").snapshot()
        assert {n.id for n in snap.visible_nodes} == {
            "getting-started/installation",
            "getting-started",
            "getting-started/quick-start",
        }
        assert len(snap.visible_edges) == 2

    def test_no_current_path_shows_hubs(self):
        snap = _session().snapshot()
        assert snap.focus_id is None
        assert len(snap.visible_nodes) == 3
        assert snap.visible_edges == []

    def test_stale_current_path_degrades_to_no_focus(self):
        snap = _session(current_path="removed/page").snapshot()
        assert snap.focus_id is None
        assert snap.current_path == "removed/page"
        assert len(snap.visible_nodes) == 3

    def test_navigation_moves_focus(self):
        session = _session(current_path="user-guide")
        session.set_current_path("deployment")
        assert session.snapshot().focus_id == "deployment"

    def test_clearing_current_path_keeps_focus(self):
        session = _session(current_path="user-guide")
        session.set_current_path(None)
        assert session.snapshot().focus_id == "user-guide"


class TestSearch:
    def test_query_switches_mode(self):
        session = _session(current_path="user-guide")
        session.set_query("quick")
        snap = session.snapshot()
        assert snap.mode is GraphMode.search
        quick = _node(snap, "getting-started/quick-start")
        assert quick.visible
        assert quick.role is NodeRole.search
        assert quick.search_score == pytest.approx(0.9)

    def test_high_scores_get_larger_radius(self):
        session = _session()
        session.set_query("chatbot")
        snap = session.snapshot()
        assert _node(snap, "user-guide/chatbot").radius == 7

    def test_clearing_query_returns_to_focus(self):
        session = _session(current_path="user-guide")
        session.set_query("quick")
        session.snapshot()
        session.set_query("")
        snap = session.snapshot()
        assert snap.mode is GraphMode.focus
        assert all(n.search_score == 0 for n in snap.nodes)

    def test_search_limit_from_config(self):
        session = _session(config=GraphConfig(search_limit=2))
        session.set_query("e")
        assert len(session.snapshot().visible_nodes) == 2


class TestDimensions:
    def test_resizes_are_coalesced(self):
        session = _session(current_path="user-guide")
        session.resize(100, 100)
        session.resize(1000, 500)
        assert session.size == (1000, 500)
        snap = session.snapshot()
        node = _node(snap, "user-guide")
        assert (node.position.x, node.position.y) == (500, 250)

    def test_compact_snapshot(self):
        session = _session(current_path="user-guide")
        session.resize(300, 200)
        snap = session.snapshot()
        assert snap.compact is True
        assert _node(snap, "user-guide").radius == pytest.approx(8 * 0.6)

    def test_unmeasured_container(self):
        session = _session(current_path="user-guide")
        session.resize(0, 0)
        node = _node(session.snapshot(), "user-guide")
        assert (node.position.x, node.position.y) == (400, 300)

    def test_model_rebuilt_only_on_size_change(self):
        session = _session()
        model = session.model
        session.resize(800, 600)
        assert session.model is model
        session.resize(640, 480)
        assert session.model is not model


class TestGesture:
    def test_click_switch_navigate(self):
        scheduler = ManualScheduler()
        navigated = []
        session = _session(current_path="user-guide", on_navigate=navigated.append,
                           scheduler=scheduler)

        assert session.click("user-guide/chatbot")
        snap = session.snapshot()
        assert snap.focus_id == "user-guide/chatbot"
        assert snap.pending_switch_id == "user-guide/chatbot"
        assert snap.clicked_id == "user-guide/chatbot"
        assert _node(snap, "user-guide/chatbot").role is NodeRole.focused

        session.activate_switch()
        assert session.snapshot().navigating is True
        scheduler.run_all()
        assert navigated == ["user-guide/chatbot"]
        assert session.snapshot().navigating is False

    def test_click_unknown_node(self):
        session = _session()
        assert session.click("nope") is False
        assert session.snapshot().pending_switch_id is None


class TestViewport:
    def test_viewport_in_snapshot(self):
        session = _session()
        session.viewport.zoom_in()
        snap = session.snapshot()
        assert snap.viewport.scale == pytest.approx(1.2)
        assert snap.viewport.zoom_label == "(120%)"


def test_snapshots_are_deterministic():
    def run():
        session = _session(current_path="api-reference/authentication")
        session.resize(640, 480)
        session.set_query("auth")
        return session.snapshot().model_dump()

    assert run() == run()


def test_snapshot_serialises_to_json():
    snap = _session(current_path="user-guide").snapshot()
    data = snap.model_dump(mode="json")
    assert data["mode"] == "focus"
    assert data["nodes"][0]["kind"] in ("page", "group")


def test_mutating_a_snapshot_leaves_the_next_one_alone():
    session = _session(current_path="getting-started/quick-start")
    first = session.snapshot()
    expected = _node(first, "getting-started/quick-start").position.x
    _node(first, "getting-started/quick-start").position.x = 9999

    second = session.snapshot()
    assert _node(second, "getting-started/quick-start").position.x == expected


def test_debug_cursor_reaches_snapshot():
    assert _session().snapshot().debug_cursor is False
    assert _session(config=GraphConfig(debug_cursor=True)).snapshot().debug_cursor is True
