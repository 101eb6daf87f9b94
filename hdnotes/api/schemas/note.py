"""
Esquemas Pydantic para notas.
"""
from typing import List, Optional
from pydantic import BaseModel


class NotePayload(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None


class NoteOut(BaseModel):
    id: str
    title: str
    content: str
    createdAt: str
    updatedAt: str


class NoteResponse(BaseModel):
    message: str
    note: NoteOut


class NoteListOut(BaseModel):
    notes: List[NoteOut]
