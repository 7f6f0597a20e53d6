"""Note service implementation."""

import logging
from typing import List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import NotFoundError, ValidationError
from ..models.note import DEFAULT_CATEGORY, DEFAULT_COLOR, Note
from ..repositories.note_repository import NoteFilters, NoteRepository
from ..schemas.notes import NoteCreate, NoteListResponse, NoteResponse, NoteUpdate
from .interfaces import INoteService

logger = logging.getLogger(__name__)

NOTE_NOT_FOUND = "Note not found"


class NoteService(INoteService):
    """Note operations, always scoped to the calling owner.

    A note owned by another user and a note that never existed both raise
    the same NotFoundError.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.note_repo = NoteRepository(session)

    async def create_note(self, owner_id: UUID, request: NoteCreate) -> NoteResponse:
        """Create new note."""
        title = (request.title or "").strip()
        if not title:
            raise ValidationError("Title is required", details={"field": "title"})

        note = await self.note_repo.create_note(
            {
                "owner_id": owner_id,
                "title": title,
                "content": (request.content or "").strip(),
                "color": request.color or DEFAULT_COLOR,
                "category": (request.category or "").strip() or DEFAULT_CATEGORY,
                "is_pinned": request.is_pinned,
                "is_favorite": request.is_favorite,
            }
        )
        logger.info("Note created", extra={"note_id": str(note.id), "user_id": str(owner_id)})
        return self._to_response(note)

    async def list_notes(self, owner_id: UUID, filters: NoteFilters) -> NoteListResponse:
        """List owner's notes, pinned first then newest first."""
        notes = await self.note_repo.list_owner_notes(owner_id, filters)
        items = [self._to_response(note) for note in notes]
        return NoteListResponse(items=items, total=len(items))

    async def get_note(self, owner_id: UUID, note_id: UUID) -> NoteResponse:
        """Get note by ID."""
        note = await self.note_repo.get_by_id_and_owner(note_id, owner_id)
        if not note:
            raise NotFoundError(NOTE_NOT_FOUND)
        return self._to_response(note)

    async def update_note(self, owner_id: UUID, note_id: UUID, request: NoteUpdate) -> NoteResponse:
        """Apply only the fields present in the request."""
        changes = request.changes()

        if "title" in changes and not changes["title"]:
            raise ValidationError("Title cannot be empty", details={"field": "title"})
        if "category" in changes and not changes["category"]:
            changes["category"] = DEFAULT_CATEGORY
        if "color" in changes and not changes["color"]:
            changes["color"] = DEFAULT_COLOR

        if not changes:
            return await self.get_note(owner_id, note_id)

        note = await self.note_repo.update_note(note_id, owner_id, changes)
        if not note:
            raise NotFoundError(NOTE_NOT_FOUND)
        return self._to_response(note)

    async def delete_note(self, owner_id: UUID, note_id: UUID) -> None:
        """Delete note; a second delete of the same id is NotFound."""
        if not await self.note_repo.delete_note(note_id, owner_id):
            raise NotFoundError(NOTE_NOT_FOUND)
        logger.info("Note deleted", extra={"note_id": str(note_id), "user_id": str(owner_id)})

    async def toggle_pin(self, owner_id: UUID, note_id: UUID) -> NoteResponse:
        """Flip the pin. Archived notes come back unchanged."""
        note = await self.note_repo.toggle_pin(note_id, owner_id)
        if note:
            return self._to_response(note)
        # nothing flipped: either archived (no-op) or not ours
        return await self.get_note(owner_id, note_id)

    async def toggle_favorite(self, owner_id: UUID, note_id: UUID) -> NoteResponse:
        note = await self.note_repo.toggle_favorite(note_id, owner_id)
        if not note:
            raise NotFoundError(NOTE_NOT_FOUND)
        return self._to_response(note)

    async def set_archived(self, owner_id: UUID, note_id: UUID, archived: bool) -> NoteResponse:
        """Archive or restore; archiving unpins."""
        note = await self.note_repo.update_note(note_id, owner_id, {"is_archived": archived})
        if not note:
            raise NotFoundError(NOTE_NOT_FOUND)
        return self._to_response(note)

    async def get_categories(self, owner_id: UUID) -> List[str]:
        """Distinct categories in use by the owner."""
        return await self.note_repo.get_owner_categories(owner_id)

    @staticmethod
    def _to_response(note: Note) -> NoteResponse:
        return NoteResponse.model_validate(note)
