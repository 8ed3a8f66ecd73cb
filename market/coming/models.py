import uuid

from sqlalchemy import Column, DateTime, ForeignKey, String
from sqlalchemy.orm import relationship

from market.database import Base, utcnow


class Coming(Base):
    """One goods-receipt event at a branch."""

    __tablename__ = "coming"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    increment_id = Column(String(20), unique=True, nullable=False, index=True)

    branch_id = Column(
        String(36),
        ForeignKey("branch.id"),
        nullable=False,
        index=True
    )
    status = Column(String, default="in_process", nullable=False)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    picking_list = relationship(
        "PickingList",
        back_populates="coming",
        cascade="all, delete-orphan",
        passive_deletes=True
    )
