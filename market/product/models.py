import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Float, ForeignKey, String
from sqlalchemy.orm import relationship

from market.database import Base, utcnow


class Product(Base):
    __tablename__ = "product"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String, nullable=False)
    price = Column(Float, nullable=False, default=0)

    branch_id = Column(
        String(36),
        ForeignKey("branch.id"),
        nullable=False,
        index=True
    )

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    branch = relationship("Branch")

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
    )
