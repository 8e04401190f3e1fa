import httpx
import pytest

from physio.api.api_run import app
from physio.domain.ExercisePlan import ExercisePlan, WeeklyPlan
from physio.events import web_observers
from physio.events.Event_Bus import EventBus, PROGRAM_COMPLETED, PROGRAM_STARTED
from physio.infra.User_Repository import UserRepository
from physio.logic.program.actions import accept_plan_for_user, log_session_for_user


def test_failing_subscriber_does_not_stop_others():
    bus = EventBus()
    seen = []

    def broken(name, payload):
        raise RuntimeError("boom")

    bus.subscribe(PROGRAM_STARTED, broken)
    bus.subscribe(PROGRAM_STARTED, lambda name, payload: seen.append(payload))
    bus.publish(PROGRAM_STARTED, {"user_id": "u1"})
    assert seen == [{"user_id": "u1"}]


def test_program_events_reach_feed(tmp_path):
    web_observers.start()
    cursor = web_observers.get_events()["next_cursor"]
    repo = UserRepository(tmp_path / "users.json")
    user = repo.create_user("Ana", "ana@example.com")

    accept_plan_for_user(repo, user.id, ExercisePlan("Neck Care", 1, [WeeklyPlan(1, "Mobility")]),
                         sessions_per_week=1)
    log_session_for_user(repo, user.id)

    feed = web_observers.get_events(since=cursor)
    types = [e["type"] for e in feed["events"]]
    assert types == [PROGRAM_STARTED, PROGRAM_COMPLETED]
    completed = feed["events"][-1]
    assert completed["plan_title"] == "Neck Care"
    assert completed["status"] == "Completed"
    assert feed["next_cursor"] == feed["events"][-1]["id"]


@pytest.mark.asyncio
async def test_events_endpoint_filters_by_cursor():
    web_observers.start()
    cursor = web_observers.get_events()["next_cursor"]
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test") as ac:
        resp = await ac.get("/api/events", params={"since": cursor})
    assert resp.status_code == 200
    assert resp.json() == {"events": [], "next_cursor": cursor}
