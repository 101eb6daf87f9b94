"""
Endpoints CRUD de notas del usuario autenticado.
"""
from fastapi import APIRouter, Depends, status

from hdnotes.api.deps import get_current_user
from hdnotes.api.schemas.auth import MessageOut
from hdnotes.api.schemas.note import NoteListOut, NotePayload, NoteResponse
from hdnotes.services import note_service as service


router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get("", response_model=NoteListOut, summary="Listar notas (más recientes primero)")
def list_notes(user=Depends(get_current_user)):
    return {"notes": service.list_notes(str(user["_id"]))}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteResponse,
    summary="Crear nota",
)
def create_note(payload: NotePayload, user=Depends(get_current_user)):
    note = service.create_note(str(user["_id"]), payload.title, payload.content)
    return {"message": "Note created successfully", "note": note}


@router.put("/{note_id}", response_model=NoteResponse, summary="Actualizar nota")
def update_note(note_id: str, payload: NotePayload, user=Depends(get_current_user)):
    note = service.update_note(str(user["_id"]), note_id, payload.title, payload.content)
    return {"message": "Note updated successfully", "note": note}


@router.delete("/{note_id}", response_model=MessageOut, summary="Eliminar nota")
def delete_note(note_id: str, user=Depends(get_current_user)):
    service.delete_note(str(user["_id"]), note_id)
    return {"message": "Note deleted successfully"}
