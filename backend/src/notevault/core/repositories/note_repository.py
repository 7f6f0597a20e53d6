"""Note repository for database operations.

Every query is filtered by ``owner_id``: a note belonging to someone else
looks exactly like a note that does not exist. Each mutation is a single
statement so a dropped request never leaves a note half-updated.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import and_, case, delete, desc, false, not_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import translate_storage_errors
from ..models.base import utcnow
from ..models.note import Note


@dataclass(frozen=True)
class NoteFilters:
    """Listing filters; empty strings mean no filter."""

    search: Optional[str] = None
    category: Optional[str] = None
    include_archived: bool = False


class NoteRepository:
    """Repository for note database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _owned(self, note_id: UUID, owner_id: UUID):
        return and_(Note.id == note_id, Note.owner_id == owner_id)

    @translate_storage_errors
    async def create_note(self, note_data: dict) -> Note:
        """Create new note."""
        note = Note(**note_data)
        self.session.add(note)
        await self.session.commit()
        await self.session.refresh(note)
        return note

    @translate_storage_errors
    async def get_by_id_and_owner(self, note_id: UUID, owner_id: UUID) -> Optional[Note]:
        """Get note by ID if owned by user."""
        stmt = select(Note).where(self._owned(note_id, owner_id))
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    @translate_storage_errors
    async def list_owner_notes(self, owner_id: UUID, filters: NoteFilters) -> List[Note]:
        """List notes, pinned first then newest first."""
        stmt = select(Note).where(Note.owner_id == owner_id)

        if not filters.include_archived:
            stmt = stmt.where(Note.is_archived == false())

        if filters.category and filters.category.strip():
            stmt = stmt.where(Note.category == filters.category.strip())

        if filters.search and filters.search.strip():
            term = filters.search.strip()
            # autoescape keeps % and _ in the search text literal
            stmt = stmt.where(
                Note.title.icontains(term, autoescape=True)
                | Note.content.icontains(term, autoescape=True)
            )

        stmt = stmt.order_by(desc(Note.is_pinned), desc(Note.created_at))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    @translate_storage_errors
    async def update_note(self, note_id: UUID, owner_id: UUID, changes: Dict[str, Any]) -> Optional[Note]:
        """Apply ``changes`` in one UPDATE ... RETURNING, None if not owned.

        Archiving clears the pin in the same statement. A pin request on a
        note that stays archived is turned off against the stored flag.
        """
        values = dict(changes)
        if values.get("is_archived") is True:
            values["is_pinned"] = False
        elif values.get("is_pinned") is True and "is_archived" not in values:
            values["is_pinned"] = case((Note.is_archived, False), else_=True)
        values["updated_at"] = utcnow()

        stmt = (
            update(Note)
            .where(self._owned(note_id, owner_id))
            .values(**values)
            .returning(Note)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        note = result.scalar_one_or_none()
        await self.session.commit()
        return note

    @translate_storage_errors
    async def toggle_pin(self, note_id: UUID, owner_id: UUID) -> Optional[Note]:
        """Flip the pin of a non-archived note, None if nothing matched."""
        stmt = (
            update(Note)
            .where(and_(self._owned(note_id, owner_id), Note.is_archived == false()))
            .values(is_pinned=not_(Note.is_pinned), updated_at=utcnow())
            .returning(Note)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        note = result.scalar_one_or_none()
        await self.session.commit()
        return note

    @translate_storage_errors
    async def toggle_favorite(self, note_id: UUID, owner_id: UUID) -> Optional[Note]:
        stmt = (
            update(Note)
            .where(self._owned(note_id, owner_id))
            .values(is_favorite=not_(Note.is_favorite), updated_at=utcnow())
            .returning(Note)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        note = result.scalar_one_or_none()
        await self.session.commit()
        return note

    @translate_storage_errors
    async def delete_note(self, note_id: UUID, owner_id: UUID) -> bool:
        """Delete note if owned by user."""
        stmt = delete(Note).where(self._owned(note_id, owner_id))
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    @translate_storage_errors
    async def get_owner_categories(self, owner_id: UUID) -> List[str]:
        """Get the distinct categories used by the owner's notes."""
        stmt = (
            select(Note.category)
            .where(Note.owner_id == owner_id)
            .distinct()
            .order_by(Note.category)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
