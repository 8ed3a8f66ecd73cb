import uuid

from sqlalchemy import Column, Date, DateTime, ForeignKey, String

from market.database import Base, utcnow


class Client(Base):
    __tablename__ = "client"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=True)
    father_name = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    birthday = Column(Date, nullable=True)
    gender = Column(String, nullable=True)

    branch_id = Column(
        String(36),
        ForeignKey("branch.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )
    active = Column(String, default="active", nullable=False)

    # drives the registration report
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
