"""
Status history database model.

Append-only log of every status a package has held.
"""

from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint, event
from backend.app.db.session import Base
from backend.app.core.exceptions import ImmutableRecordError


class StatusHistory(Base):
    """
    One immutable status record.

    Rows are write-once: the ORM refuses to update or delete them.
    `sequence` numbers a package's entries 1..N in append order; the unique
    (package_id, sequence) pair rejects two writers appending the same slot.
    """
    __tablename__ = "status_history"
    __table_args__ = (
        UniqueConstraint("package_id", "sequence", name="uq_status_history_package_sequence"),
    )

    id = Column(String(36), primary_key=True)
    package_id = Column(String(36), ForeignKey("packages.id"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False)
    status = Column(String(255), nullable=False)
    timestamp = Column(String(32), nullable=False)

    def __repr__(self):
        return (
            f"<StatusHistory(package_id='{self.package_id}', seq={self.sequence}, "
            f"status='{self.status}', timestamp='{self.timestamp}')>"
        )


@event.listens_for(StatusHistory, "before_update")
def _reject_history_update(mapper, connection, target):
    raise ImmutableRecordError(StatusHistory.__tablename__)


@event.listens_for(StatusHistory, "before_delete")
def _reject_history_delete(mapper, connection, target):
    raise ImmutableRecordError(StatusHistory.__tablename__)
