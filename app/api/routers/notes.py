from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.db import models

router = APIRouter()

LIST_LIMIT = 50


class NoteCreate(BaseModel):
    title: str | int | float | None = None
    body: str | int | float | None = None


@router.get("")
async def list_notes(db: AsyncSession = Depends(deps.get_db)):
    result = await db.execute(
        select(models.Note).order_by(models.Note.created_at.desc(), models.Note.id.desc()).limit(LIST_LIMIT)
    )
    return [note.to_dict() for note in result.scalars()]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_note(payload: NoteCreate, db: AsyncSession = Depends(deps.get_db)):
    if not payload.title:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="title is required")
    note = models.Note(title=str(payload.title), body=str(payload.body) if payload.body else "")
    db.add(note)
    await db.commit()
    await db.refresh(note)
    return note.to_dict()
