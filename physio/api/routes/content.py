from fastapi import APIRouter, Depends, HTTPException, Response

from physio.infra.Content_Repository import ContentRepository, get_content_repository
from physio.utilities.validators import AnnouncementInput, JournalInput

router = APIRouter(prefix="/api")


# === Announcements ===
@router.get("/announcements")
def list_announcements(repo: ContentRepository = Depends(get_content_repository)):
    return [a.to_dict() for a in repo.list_announcements()]


@router.post("/announcements", status_code=201)
def add_announcement(payload: AnnouncementInput, repo: ContentRepository = Depends(get_content_repository)):
    return repo.add_announcement(payload.title, payload.content).to_dict()


@router.put("/announcements/{announcement_id}")
def update_announcement(announcement_id: str, payload: AnnouncementInput,
                        repo: ContentRepository = Depends(get_content_repository)):
    updated = repo.update_announcement(announcement_id, payload.title, payload.content)
    if updated is None:
        raise HTTPException(status_code=404, detail="Announcement not found")
    return updated.to_dict()


@router.delete("/announcements/{announcement_id}", status_code=204)
def delete_announcement(announcement_id: str, repo: ContentRepository = Depends(get_content_repository)):
    if not repo.delete_announcement(announcement_id):
        raise HTTPException(status_code=404, detail="Announcement not found")
    return Response(status_code=204)


# === Journals ===
@router.get("/journals")
def list_journals(repo: ContentRepository = Depends(get_content_repository)):
    return [j.to_dict() for j in repo.list_journals()]


@router.post("/journals", status_code=201)
def add_journal(payload: JournalInput, repo: ContentRepository = Depends(get_content_repository)):
    return repo.add_journal(payload.title, payload.publisher, payload.year, payload.link).to_dict()


@router.put("/journals/{journal_id}")
def update_journal(journal_id: str, payload: JournalInput, repo: ContentRepository = Depends(get_content_repository)):
    updated = repo.update_journal(journal_id, payload.title, payload.publisher, payload.year, payload.link)
    if updated is None:
        raise HTTPException(status_code=404, detail="Journal not found")
    return updated.to_dict()


@router.delete("/journals/{journal_id}", status_code=204)
def delete_journal(journal_id: str, repo: ContentRepository = Depends(get_content_repository)):
    if not repo.delete_journal(journal_id):
        raise HTTPException(status_code=404, detail="Journal not found")
    return Response(status_code=204)
