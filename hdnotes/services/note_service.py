"""
Service layer for notes: validación de entrada + repositorio acotado por dueño.
"""
from typing import Any, Dict, List, Optional, Tuple

from hdnotes.core.exceptions import NotFoundError, ValidationError
from hdnotes.repositories import note_repo


def _clean(title: Optional[str], content: Optional[str]) -> Tuple[str, str]:
    title = (title or "").strip()
    content = (content or "").strip()
    if not title or not content:
        raise ValidationError("Title and content are required")
    return title, content


def note_out(doc: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": str(doc["_id"]),
        "title": doc.get("title"),
        "content": doc.get("content"),
        "createdAt": doc.get("created_at"),
        "updatedAt": doc.get("updated_at"),
    }


def list_notes(user_id: str) -> List[Dict[str, Any]]:
    return [note_out(d) for d in note_repo.list_notes(user_id)]


def create_note(user_id: str, title: Optional[str], content: Optional[str]) -> Dict[str, Any]:
    title, content = _clean(title, content)
    return note_out(note_repo.insert_note(user_id, title, content))


def update_note(user_id: str, note_id: str, title: Optional[str], content: Optional[str]) -> Dict[str, Any]:
    title, content = _clean(title, content)
    doc = note_repo.update_note(note_id, user_id, title, content)
    if not doc:
        raise NotFoundError("Note not found")
    return note_out(doc)


def delete_note(user_id: str, note_id: str) -> None:
    if not note_repo.delete_note(note_id, user_id):
        raise NotFoundError("Note not found")
