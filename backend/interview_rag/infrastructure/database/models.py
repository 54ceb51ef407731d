import uuid as uuid_pkg
from datetime import UTC, datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, MappedAsDataclass, mapped_column


def generate_uuid() -> str:
    """Return a new random identifier in its canonical string form."""
    return str(uuid_pkg.uuid4())


class UUIDMixin(MappedAsDataclass):
    """Mixin adding a client-generated UUID primary key stored as a string.

    The key is generated with ``uuid4`` when the object is constructed, so
    callers know the identifier before the row is flushed. It is excluded from
    dataclass initialization (init=False).
    """

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default_factory=generate_uuid, init=False)


class TimestampMixin(MappedAsDataclass):
    """Mixin for adding created_at and updated_at timestamp columns.

    Both timestamps are timezone-aware UTC values and excluded from dataclass
    initialization. ``updated_at`` is refreshed by SQLAlchemy on every UPDATE
    issued through the ORM or Core.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default_factory=lambda: datetime.now(UTC),
        nullable=False,
        init=False,
    )

    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        default_factory=lambda: datetime.now(UTC),
        onupdate=lambda: datetime.now(UTC),
        nullable=True,
        init=False,
    )
