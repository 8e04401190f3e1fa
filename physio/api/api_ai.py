import os
import re
import json
import logging
from json import JSONDecodeError
from typing import Optional
from openai import OpenAI
from fastapi import APIRouter, HTTPException

from physio.domain.ExercisePlan import ExercisePlan
from physio.domain.errors import MalformedPlanError
from physio.logic.program.checks import validate_plan
from physio.utilities.config import OPENAI_MODEL
from physio.utilities.constants import PROMPT_TEMPLATE, PLAN_JSON_FORMAT
from physio.utilities.validators import PlanRequestInput

logger = logging.getLogger(__name__)


# === Helper: Get OpenAI Client ===
def _get_openai_client():
    """Return an OpenAI client if OPENAI_API_KEY is set, otherwise None."""
    api_key = os.environ.get("OPENAI_API_KEY")
    if not api_key:
        return None
    return OpenAI(api_key=api_key)


# === Prompt ===
def build_plan_prompt(request: PlanRequestInput) -> str:
    lines = [f"Patient condition: {request.condition}."]
    if request.goals:
        lines.append(f"Goals: {request.goals}.")
    profile = [f"{label} {value}" for label, value in
               (("age", request.age), ("weight (kg)", request.weight), ("height (cm)", request.height)) if value]
    if profile:
        lines.append("Profile: " + ", ".join(profile) + ".")
    return " ".join(lines) + PROMPT_TEMPLATE + PLAN_JSON_FORMAT


# === Plan Parsing ===
def parse_plan_output(text: str) -> Optional[ExercisePlan]:
    """Turn raw model output into a validated ExercisePlan, or None if it cannot be recovered."""
    text = (text or "").strip()
    if not text:
        return None
    candidates = [text]
    stripped = _remove_trailing_commas(_strip_code_fences(text))
    candidates.append(stripped)
    balanced = _extract_json_by_balancing(stripped)
    if balanced:
        candidates.append(_remove_trailing_commas(balanced))

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except JSONDecodeError:
            continue
        if not isinstance(parsed, dict):
            continue
        plan = ExercisePlan.from_dict(parsed)
        try:
            return validate_plan(plan)
        except MalformedPlanError as e:
            logger.warning(f"AI plan rejected: {e}")
            return None
    return None


# === Plan Generation ===
def create_plan_from_ai(request: PlanRequestInput) -> Optional[ExercisePlan]:
    """Ask the model for an exercise plan matching the patient's details."""
    client = _get_openai_client()
    if client is None:
        logger.warning("OPENAI_API_KEY not set, cannot generate exercise plan.")
        return None

    response = client.responses.create(model=OPENAI_MODEL, input=build_plan_prompt(request))
    raw = (response.output_text or "").strip()
    if not raw:
        logger.warning("AI returned empty plan data")
        return None

    plan = parse_plan_output(raw)
    if plan is not None:
        return plan

    # === Try to fix the JSON via AI ===
    fixed = _request_json_fix(client, raw)
    if fixed:
        plan = parse_plan_output(fixed)
        if plan is not None:
            return plan

    logger.error("AI output is not a valid exercise plan and could not be repaired")
    return None


# === Text Cleaning Helpers ===
def _strip_code_fences(text: str) -> str:
    """Remove common markdown code fences and leading/trailing whitespace."""
    text = re.sub(r"```(?:json)?\n(.*?)```", r"\1", text, flags=re.S)
    text = re.sub(r"^```|```$", "", text)
    return text.strip()


def _remove_trailing_commas(text: str) -> str:
    """Remove common trailing commas in JSON-like text to help json.loads succeed."""
    return re.sub(r",\s*(\}|\])", r"\1", text)


def _extract_json_by_balancing(text: str) -> Optional[str]:
    """Extract the first JSON object/array by balancing braces/brackets."""
    start = None
    stack = []
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if escape:
            escape = False
            continue
        if in_string:
            if ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch in "{[":
            if start is None:
                start = i
            stack.append(ch)
        elif ch in "}]":
            if not stack:
                continue
            opening = stack.pop()
            if (opening == "{" and ch != "}") or (opening == "[" and ch != "]"):
                return None
            if not stack and start is not None:
                return text[start:i + 1]
    return None


def _request_json_fix(client: OpenAI, previous_output: str) -> Optional[str]:
    """Ask the model to reformat previous_output as a strict JSON object."""
    try:
        prompt = (
            "The previous response contained an exercise plan but was not valid JSON. "
            "Please reformat ONLY the plan as valid JSON (no surrounding text) using the same keys. "
            "Here is the original output:\n\n" + previous_output
        )
        resp = client.responses.create(model=OPENAI_MODEL, input=prompt)
        return (resp.output_text or "").strip()
    except Exception:
        logger.exception("Error while requesting AI to fix JSON formatting")
        return None


# === FastAPI Endpoint ===
router = APIRouter()


@router.post("/generate-plan-ai")
def generate_plan_ai(request: PlanRequestInput):
    if _get_openai_client() is None:
        raise HTTPException(status_code=503, detail="AI plan generation is not configured")
    try:
        plan = create_plan_from_ai(request)
    except Exception as e:
        logger.exception("AI plan generation failed")
        raise HTTPException(status_code=502, detail=str(e))
    if plan is None:
        raise HTTPException(status_code=502, detail="AI did not return a valid exercise plan")
    return plan.to_dict()
