from fastapi import (
    FastAPI,
    Query,
    Depends,
    HTTPException,
    Body,
)
from typing import Optional
import logging

from physio.domain.errors import (
    ConcurrentUpdateError,
    MalformedPlanError,
    ProgressStateError,
    UserNotFoundError,
)
from physio.infra.User_Repository import UserRepository, get_user_repository
from physio.logic.program.actions import accept_plan_for_user, log_session_for_user
from physio.logic.program.tracker import SESSION_LOGGED, PLAN_COMPLETED, ALREADY_COMPLETE
from physio.logic.reporting.progress_summary import build_progress_summary
from physio.utilities.validators import AcceptPlanInput, LogSessionInput, UserCreateInput
from physio.events.web_observers import start as start_event_observers, get_events as get_web_events

# Routers
from physio.api.routes import messages, content
from physio.api.api_ai import router as ai_router

# Logging
logger = logging.getLogger("physio_app")

SESSION_MESSAGES = {
    SESSION_LOGGED: "Session logged.",
    PLAN_COMPLETED: "Congratulations! You've completed your exercise program.",
    ALREADY_COMPLETE: "This program is already complete!",
}

# Initialize FastAPI app
app = FastAPI(title="PhysioTrack API")

# Include routers
app.include_router(messages.router)
app.include_router(content.router)
app.include_router(ai_router)


@app.on_event("startup")
def _startup():
    """Register event bus subscribers and make sure the guest profile exists."""
    start_event_observers()
    get_user_repository().ensure_guest_user()


# -------------------- Users --------------------
@app.get("/api/users")
def list_users(repo: UserRepository = Depends(get_user_repository)):
    return [u.to_dict() for u in repo.list_users()]


@app.post("/api/users", status_code=201)
def create_user(payload: UserCreateInput, repo: UserRepository = Depends(get_user_repository)):
    try:
        user = repo.create_user(payload.name, payload.email)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return user.to_dict()


@app.get("/api/users/{user_id}")
def get_user(user_id: str, repo: UserRepository = Depends(get_user_repository)):
    try:
        user = repo.get(user_id)
    except ProgressStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user.to_dict()


# -------------------- Program --------------------
@app.post("/api/users/{user_id}/plan")
def accept_plan(user_id: str, payload: AcceptPlanInput, repo: UserRepository = Depends(get_user_repository)):
    """Make the posted plan the user's active program (replacing any current one)."""
    try:
        user = accept_plan_for_user(repo, user_id, payload.plan.to_plan(), payload.sessions_per_week)
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except MalformedPlanError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except ProgressStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {"message": "Program added to your dashboard!", "user": user.to_dict()}


@app.post("/api/users/{user_id}/sessions")
def log_session(user_id: str, payload: Optional[LogSessionInput] = Body(default=None),
                repo: UserRepository = Depends(get_user_repository)):
    expected = payload.expected_completed_sessions if payload else None
    try:
        user, result = log_session_for_user(repo, user_id, expected_completed_sessions=expected)
    except UserNotFoundError:
        raise HTTPException(status_code=404, detail="User not found")
    except (ConcurrentUpdateError, ProgressStateError) as e:
        raise HTTPException(status_code=409, detail=str(e))
    if result.status not in SESSION_MESSAGES:
        raise HTTPException(status_code=409, detail="No active program to log a session against")
    return {"status": result.status, "message": SESSION_MESSAGES[result.status], "user": user.to_dict()}


@app.get("/api/users/{user_id}/summary")
def program_summary(user_id: str, repo: UserRepository = Depends(get_user_repository)):
    try:
        user = repo.get(user_id)
    except ProgressStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return build_progress_summary(user)


# -------------------- Activity feed --------------------
@app.get("/api/events")
def recent_events(since: Optional[int] = Query(default=None, ge=0)):
    return get_web_events(since)
