from sqlalchemy import CheckConstraint, Column, Float, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.core.constants import (
    DEFAULT_PAYMENT_METHOD,
    DEFAULT_SALE_STATUS,
    PAYMENT_METHODS,
    SALE_STATUSES,
)
from app.core.money import to_cents
from app.database.base import Base, TimestampMixin, one_of


class Sale(TimestampMixin, Base):
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True)
    total_amount = Column(Float, nullable=False)
    customer_name = Column(String)
    payment_method = Column(String, nullable=False, default=DEFAULT_PAYMENT_METHOD)
    pharmacist_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"))
    status = Column(String, nullable=False, default=DEFAULT_SALE_STATUS)

    items = relationship(
        "SaleItem",
        cascade="all, delete-orphan",
        order_by="SaleItem.position",
        lazy="selectin",
    )
    pharmacist = relationship("User", lazy="joined")

    __table_args__ = (
        CheckConstraint("total_amount >= 0", name="ck_sales_total_non_negative"),
        one_of("payment_method", PAYMENT_METHODS, name="ck_sales_payment_method"),
        one_of("status", SALE_STATUSES, name="ck_sales_status"),
    )


class SaleItem(Base):
    __tablename__ = "sale_items"

    id = Column(Integer, primary_key=True)
    sale_id = Column(Integer, ForeignKey("sales.id", ondelete="CASCADE"), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    medicine_id = Column(Integer, ForeignKey("medicines.id", ondelete="SET NULL"))
    # Captured at sale time; later medicine edits or deletion do not change them.
    medicine_name = Column(String, nullable=False)
    quantity = Column(Integer, nullable=False)
    price = Column(Float, nullable=False)

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_sale_items_quantity"),
    )

    @property
    def line_total(self) -> float:
        return to_cents(self.price * self.quantity)


__all__ = ["Sale", "SaleItem"]
