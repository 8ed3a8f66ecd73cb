import uuid

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from market.database import Base, utcnow


class Sale(Base):
    __tablename__ = "sale"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    increment_id = Column(String(20), unique=True, nullable=False, index=True)

    branch_id = Column(
        String(36),
        ForeignKey("branch.id"),
        nullable=False,
        index=True
    )
    client_id = Column(
        String(36),
        ForeignKey("client.id", ondelete="SET NULL"),
        nullable=True
    )

    # total_price is the sum of the line items; debt = total_price - paid
    total_price = Column(Float, nullable=False, default=0)
    paid = Column(Float, nullable=False, default=0)
    debt = Column(Float, nullable=False, default=0)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    items = relationship(
        "SaleProduct",
        back_populates="sale",
        cascade="all, delete-orphan",
        passive_deletes=True
    )


class SaleProduct(Base):
    """Sale line item. price is the product price at the moment of sale."""

    __tablename__ = "sale_product"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    product_id = Column(
        String(36),
        ForeignKey("product.id", ondelete="SET NULL"),
        nullable=True
    )
    sale_id = Column(
        String(36),
        ForeignKey("sale.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    sale_increment_id = Column(String(20), nullable=False)

    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)
    total_price = Column(Float, nullable=False)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    sale = relationship("Sale", back_populates="items")
    product = relationship("Product")
