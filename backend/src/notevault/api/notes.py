"""Notes API endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.repositories.note_repository import NoteFilters
from ..core.schemas.notes import ArchiveRequest, NoteCreate, NoteListResponse, NoteResponse, NoteUpdate
from ..core.services import NoteService
from ..database import get_db_session
from ..middleware.auth import get_current_user_id

router = APIRouter(prefix="/notes", tags=["notes"])


def get_note_service(session: AsyncSession = Depends(get_db_session)) -> NoteService:
    return NoteService(session)


@router.post("/", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    request: NoteCreate,
    current_user_id: UUID = Depends(get_current_user_id),
    notes: NoteService = Depends(get_note_service),
):
    """Create a new note."""
    return await notes.create_note(current_user_id, request)


@router.get("/", response_model=NoteListResponse)
async def list_notes(
    search: Optional[str] = Query(None, max_length=200),
    category: Optional[str] = Query(None, max_length=50),
    include_archived: bool = Query(False, alias="isArchived"),
    current_user_id: UUID = Depends(get_current_user_id),
    notes: NoteService = Depends(get_note_service),
):
    """List notes, pinned first then newest first."""
    filters = NoteFilters(search=search, category=category, include_archived=include_archived)
    return await notes.list_notes(current_user_id, filters)


@router.get("/categories", response_model=List[str])
async def get_categories(
    current_user_id: UUID = Depends(get_current_user_id),
    notes: NoteService = Depends(get_note_service),
):
    """Get the categories used by the current user's notes."""
    return await notes.get_categories(current_user_id)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    notes: NoteService = Depends(get_note_service),
):
    """Get a specific note."""
    return await notes.get_note(current_user_id, note_id)


@router.api_route("/{note_id}", methods=["PUT", "PATCH"], response_model=NoteResponse)
async def update_note(
    note_id: UUID,
    request: NoteUpdate,
    current_user_id: UUID = Depends(get_current_user_id),
    notes: NoteService = Depends(get_note_service),
):
    """Update the supplied fields of a note."""
    return await notes.update_note(current_user_id, note_id, request)


@router.delete("/{note_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_note(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    notes: NoteService = Depends(get_note_service),
):
    """Delete a note."""
    await notes.delete_note(current_user_id, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch("/{note_id}/pin", response_model=NoteResponse)
async def toggle_pin(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    notes: NoteService = Depends(get_note_service),
):
    """Pin or unpin a note. Archived notes are left as they are."""
    return await notes.toggle_pin(current_user_id, note_id)


@router.patch("/{note_id}/favorite", response_model=NoteResponse)
async def toggle_favorite(
    note_id: UUID,
    current_user_id: UUID = Depends(get_current_user_id),
    notes: NoteService = Depends(get_note_service),
):
    """Mark or unmark a note as favorite."""
    return await notes.toggle_favorite(current_user_id, note_id)


@router.patch("/{note_id}/archive", response_model=NoteResponse)
async def set_archived(
    note_id: UUID,
    request: Optional[ArchiveRequest] = None,
    current_user_id: UUID = Depends(get_current_user_id),
    notes: NoteService = Depends(get_note_service),
):
    """Archive (and unpin) or restore a note."""
    archived = request.archived if request is not None else True
    return await notes.set_archived(current_user_id, note_id, archived)
