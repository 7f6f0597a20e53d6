# Note model for user content
import uuid

from sqlalchemy import Boolean, CheckConstraint, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel

DEFAULT_COLOR = "#ffffff"
DEFAULT_CATEGORY = "General"


class Note(BaseModel):
    """Personal note. Only ever read or written through its owner's id."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    color: Mapped[str] = mapped_column(String(32), nullable=False, default=DEFAULT_COLOR)
    category: Mapped[str] = mapped_column(String(50), nullable=False, default=DEFAULT_CATEGORY)

    is_pinned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_favorite: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_archived: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # owner reference, set once at creation
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )

    __table_args__ = (
        Index("idx_notes_owner_created", "owner_id", "created_at"),
        Index("idx_notes_owner_pinned", "owner_id", "is_pinned"),
        CheckConstraint("length(title) <= 200", name="ck_notes_title_len"),
        CheckConstraint("length(category) <= 50", name="ck_notes_category_len"),
        CheckConstraint("NOT (is_archived AND is_pinned)", name="ck_notes_archived_not_pinned"),
    )

    def __repr__(self) -> str:
        truncated = self.title if len(self.title) <= 30 else (self.title[:30] + "...")
        return f"<Note(title='{truncated}', owner_id={self.owner_id})>"

