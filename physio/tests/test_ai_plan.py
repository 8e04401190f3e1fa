import json
from fastapi.testclient import TestClient

from physio.api import api_ai
from physio.api.api_run import app

PLAN = {
    "planTitle": "Knee Rehab",
    "durationWeeks": 2,
    "weeklyPlans": [
        {"week": 1, "focus": "Activation", "exercises": [{"name": "Quad sets", "sets": 3, "reps": 10, "notes": ""}]},
        {"week": 2, "focus": "Loading", "exercises": []},
    ],
}


class FakeResponse:
    def __init__(self, text):
        self.output_text = text


class FakeResponses:
    def __init__(self, outputs):
        self.outputs = list(outputs)
        self.prompts = []

    def create(self, model, input):
        self.prompts.append(input)
        return FakeResponse(self.outputs.pop(0))


class FakeClient:
    def __init__(self, *outputs):
        self.responses = FakeResponses(outputs)


def test_parse_plain_json():
    plan = api_ai.parse_plan_output(json.dumps(PLAN))
    assert plan.plan_title == "Knee Rehab"
    assert plan.weekly_plans[0].exercises[0].sets == "3"


def test_parse_fenced_json_with_trailing_commas():
    text = "Here you go:\n```json\n" + json.dumps(PLAN)[:-1] + ",}\n```"
    plan = api_ai.parse_plan_output(text)
    assert plan is not None
    assert plan.duration_weeks == 2


def test_parse_rejects_malformed_weeks():
    bad = dict(PLAN, durationWeeks=3)
    assert api_ai.parse_plan_output(json.dumps(bad)) is None
    assert api_ai.parse_plan_output("no plan here") is None
    assert api_ai.parse_plan_output("") is None


def test_prompt_mentions_patient_details():
    request = api_ai.PlanRequestInput(condition="Patellar tendinopathy", goals="Run again", age="41")
    prompt = api_ai.build_plan_prompt(request)
    assert "Patellar tendinopathy" in prompt
    assert "Run again" in prompt
    assert "age 41" in prompt


def test_endpoint_without_key_is_unavailable(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    resp = TestClient(app).post("/generate-plan-ai", json={"condition": "Low back pain"})
    assert resp.status_code == 503


def test_endpoint_returns_plan(monkeypatch):
    fake = FakeClient(json.dumps(PLAN))
    monkeypatch.setattr(api_ai, "_get_openai_client", lambda: fake)
    resp = TestClient(app).post("/generate-plan-ai", json={"condition": "Knee pain after surgery"})
    assert resp.status_code == 200, resp.text
    assert resp.json()["planTitle"] == "Knee Rehab"
    assert resp.json()["weeklyPlans"][0]["exercises"][0]["reps"] == "10"


def test_endpoint_repairs_bad_output(monkeypatch):
    fake = FakeClient("Sorry, the plan is: {planTitle: Knee}", json.dumps(PLAN))
    monkeypatch.setattr(api_ai, "_get_openai_client", lambda: fake)
    resp = TestClient(app).post("/generate-plan-ai", json={"condition": "Knee pain after surgery"})
    assert resp.status_code == 200
    assert len(fake.responses.prompts) == 2
    assert "was not valid JSON" in fake.responses.prompts[1]


def test_endpoint_gives_up_on_unusable_output(monkeypatch):
    fake = FakeClient("nothing useful", "still nothing")
    monkeypatch.setattr(api_ai, "_get_openai_client", lambda: fake)
    resp = TestClient(app).post("/generate-plan-ai", json={"condition": "Knee pain after surgery"})
    assert resp.status_code == 502
