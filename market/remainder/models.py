import uuid

from sqlalchemy import (
    CheckConstraint, Column, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint
)
from sqlalchemy.orm import relationship

from market.database import Base, utcnow


class Remainder(Base):
    """Stock ledger row: current quantity and reference prices of one product at one branch."""

    __tablename__ = "remainder"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    product_id = Column(
        String(36),
        ForeignKey("product.id", ondelete="CASCADE"),
        nullable=False
    )
    branch_id = Column(
        String(36),
        ForeignKey("branch.id", ondelete="CASCADE"),
        nullable=False
    )
    name = Column(String, nullable=True)

    quantity = Column(Integer, nullable=False, default=0)
    coming_price = Column(Float, nullable=False, default=0)
    sale_price = Column(Float, nullable=False, default=0)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    product = relationship("Product")

    __table_args__ = (
        UniqueConstraint("product_id", "branch_id", name="uq_remainder_product_branch"),
        CheckConstraint("quantity >= 0", name="ck_remainder_quantity_non_negative"),
    )
