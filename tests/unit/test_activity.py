"""Tests for the session activity tracker."""

import json

import httpx
import pybreaker
import pytest
import respx

from conftest import ACTIVITY_URL
from pagecraft.clients import SessionTracker
from pagecraft.layout import EditorSession, find_node


@pytest.fixture
def tracker():
    with SessionTracker(ACTIVITY_URL, user_id="u-1", username="alice") as tracker:
        yield tracker


@pytest.mark.unit
def test_tracker_initializes_circuit_breaker(tracker):
    assert isinstance(tracker._breaker, pybreaker.CircuitBreaker)
    assert tracker._breaker.name == "activity-http"
    assert tracker._breaker.fail_max == 5
    assert isinstance(tracker._breaker.listeners[0], pybreaker.CircuitBreakerListener)


@pytest.mark.unit
@respx.mock
def test_start_stores_session_id(tracker):
    route = respx.post(f"{ACTIVITY_URL}/api/session/start").mock(
        return_value=httpx.Response(200, json={"id": "abc123"})
    )

    assert tracker.start() == "abc123"
    assert tracker.session_id == "abc123"
    assert tracker.active
    assert json.loads(route.calls.last.request.content) == {"userId": "u-1", "username": "alice"}


@pytest.mark.unit
@respx.mock
def test_start_without_id_in_reply_stays_inactive(tracker):
    respx.post(f"{ACTIVITY_URL}/api/session/start").mock(return_value=httpx.Response(200, json={}))
    route = respx.post(f"{ACTIVITY_URL}/api/activity/log")

    assert tracker.start() is None
    assert tracker.session_id is None
    tracker.log_activity("component_add")

    assert not route.called


@pytest.mark.unit
@respx.mock
def test_start_failure_is_swallowed(tracker):
    respx.post(f"{ACTIVITY_URL}/api/session/start").mock(return_value=httpx.Response(503))

    assert tracker.start() is None
    assert not tracker.active


@pytest.mark.unit
@respx.mock
def test_calls_before_start_are_skipped(tracker):
    route = respx.post(f"{ACTIVITY_URL}/api/activity/log")

    tracker.log_activity("component_add")
    tracker.end()

    assert not route.called


@pytest.mark.unit
@respx.mock
def test_log_endpoints(tracker):
    respx.post(f"{ACTIVITY_URL}/api/session/start").mock(return_value=httpx.Response(200, json={"id": "s1"}))
    activity = respx.post(f"{ACTIVITY_URL}/api/activity/log").mock(return_value=httpx.Response(201))
    generation = respx.post(f"{ACTIVITY_URL}/api/code-generation/log").mock(return_value=httpx.Response(201))
    usage = respx.post(f"{ACTIVITY_URL}/api/component-usage/log").mock(return_value=httpx.Response(201))
    end = respx.post(f"{ACTIVITY_URL}/api/session/s1/end").mock(return_value=httpx.Response(200))

    tracker.start()
    tracker.log_activity("project_save", project_id=4, details={"name": "Site"})
    tracker.log_code_generation({"components": []}, "export default 1;", "generate")
    tracker.log_component_usage("card", "added")
    tracker.end()

    assert json.loads(activity.calls.last.request.content) == {
        "sessionId": "s1",
        "userId": "u-1",
        "activityType": "project_save",
        "details": {"name": "Site"},
        "projectId": 4,
    }
    assert json.loads(generation.calls.last.request.content)["generationType"] == "generate"
    assert json.loads(usage.calls.last.request.content)["componentType"] == "card"
    assert end.called
    assert end.calls.last.request.content == b""
    assert tracker.session_id is None


@pytest.mark.unit
@respx.mock
def test_breaker_opens_after_repeated_failures(tracker):
    tracker.session_id = "s1"
    route = respx.post(f"{ACTIVITY_URL}/api/activity/log").mock(side_effect=httpx.ConnectError("down"))

    for _ in range(8):
        tracker.log_activity("layout_change")

    assert tracker._breaker.current_state == pybreaker.STATE_OPEN
    assert route.call_count == tracker._breaker.fail_max


@pytest.mark.integration
@respx.mock
def test_editing_with_unstarted_tracker(tracker):
    route = respx.route(host="activity.test")

    session = EditorSession(tracker=tracker)
    node = session.add_component("container")
    session.update_props(node.id, {"padding": "p-8"})
    session.remove_component(node.id)

    assert session.layout.components == ()
    assert not route.called


@pytest.mark.integration
@respx.mock
def test_editing_after_session_end(tracker):
    respx.post(f"{ACTIVITY_URL}/api/session/start").mock(return_value=httpx.Response(200, json={"id": "s1"}))
    respx.post(f"{ACTIVITY_URL}/api/session/s1/end").mock(return_value=httpx.Response(200))
    activity = respx.post(f"{ACTIVITY_URL}/api/activity/log")
    tracker.start()
    tracker.end()

    session = EditorSession(tracker=tracker)
    node = session.add_component("text")

    assert find_node(session.layout, node.id) is not None
    assert not activity.called


@pytest.mark.integration
@respx.mock
def test_editor_session_emits_events(tracker):
    respx.post(f"{ACTIVITY_URL}/api/session/start").mock(return_value=httpx.Response(200, json={"id": "s1"}))
    activity = respx.post(f"{ACTIVITY_URL}/api/activity/log").mock(return_value=httpx.Response(201))
    usage = respx.post(f"{ACTIVITY_URL}/api/component-usage/log").mock(return_value=httpx.Response(201))
    tracker.start()

    session = EditorSession(tracker=tracker, project_id=1)
    node = session.add_component("card")
    session.remove_component(node.id)

    types = [json.loads(call.request.content)["activityType"] for call in activity.calls]
    assert types == ["component_add", "component_remove"]
    assert [json.loads(call.request.content)["action"] for call in usage.calls] == ["added", "removed"]
