import uuid

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from market.database import Base, utcnow


class PickingList(Base):
    __tablename__ = "picking_list"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    product_id = Column(
        String(36),
        ForeignKey("product.id", ondelete="SET NULL"),
        nullable=True
    )
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False, default=0)
    total_price = Column(Float, nullable=False, default=0)

    coming_id = Column(
        String(36),
        ForeignKey("coming.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    coming_increment_id = Column(String(20), nullable=False)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    coming = relationship("Coming", back_populates="picking_list")
    product = relationship("Product")
