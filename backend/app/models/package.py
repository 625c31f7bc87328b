"""
Package database model.

Current-state record for a tracked shipment.
"""

from sqlalchemy import Column, String, Text
from backend.app.db.session import Base

# Status assigned by registration; every other status is caller-defined
REGISTERED_STATUS = "registered"


class Package(Base):
    """
    Package model.

    `status` and `timestamp` change on every status update and always mirror
    the newest row in status_history for this package. `description` is set
    once at registration.
    """
    __tablename__ = "packages"

    id = Column(String(36), primary_key=True)
    status = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    # RFC3339 UTC text, e.g. 2026-10-19T08:15:02.123456Z
    timestamp = Column(String(32), nullable=False, index=True)

    def __repr__(self):
        return f"<Package(id='{self.id}', status='{self.status}', timestamp='{self.timestamp}')>"
