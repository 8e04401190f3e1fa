from uuid import uuid4
from fastapi import APIRouter, Depends, HTTPException
import logging

from physio.domain.User import AdminMessage, UserRecord
from physio.domain.errors import ProgressStateError
from physio.infra.User_Repository import UserRepository, get_user_repository
from physio.logic.program.clock import now_iso
from physio.utilities.validators import MessageInput

router = APIRouter(prefix="/api/users/{user_id}/messages")
logger = logging.getLogger(__name__)


def _load_user(repo: UserRepository, user_id: str) -> UserRecord:
    try:
        user = repo.get(user_id)
    except ProgressStateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("")
def list_messages(user_id: str, repo: UserRepository = Depends(get_user_repository)):
    user = _load_user(repo, user_id)
    return {
        "messages": [m.to_dict() for m in user.messages_from_admin],
        "unread": sum(1 for m in user.messages_from_admin if not m.read),
    }


@router.post("", status_code=201)
def send_message(user_id: str, payload: MessageInput, repo: UserRepository = Depends(get_user_repository)):
    """Admin sends a private message to the user's inbox."""
    with repo.transaction(user_id):
        user = _load_user(repo, user_id)
        message = AdminMessage(id=f"msg_{uuid4().hex[:12]}", text=payload.text, timestamp=now_iso())
        repo.put(user.replace(messages_from_admin=user.messages_from_admin + [message]))
    logger.info(f"Message {message.id} sent to user {user_id}")
    return message.to_dict()


@router.patch("/{message_id}/read")
def mark_read(user_id: str, message_id: str, repo: UserRepository = Depends(get_user_repository)):
    with repo.transaction(user_id):
        user = _load_user(repo, user_id)
        messages = [AdminMessage.from_dict(m.to_dict()) for m in user.messages_from_admin]
        target = next((m for m in messages if m.id == message_id), None)
        if target is None:
            raise HTTPException(status_code=404, detail="Message not found")
        target.read = True
        repo.put(user.replace(messages_from_admin=messages))
    return target.to_dict()
