from sqlalchemy import CheckConstraint, Column, Date, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import relationship

from app.database.base import Base, TimestampMixin


class Medicine(TimestampMixin, Base):
    __tablename__ = "medicines"

    id = Column(Integer, primary_key=True)

    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    description = Column(Text)
    manufacturer = Column(String, nullable=False)

    purchase_price = Column(Float, nullable=False)
    selling_price = Column(Float, nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
    min_stock_threshold = Column(Integer, nullable=False, default=10)

    supplier_id = Column(Integer, ForeignKey("suppliers.id"))
    expiry_date = Column(Date, nullable=False)
    batch_number = Column(String, nullable=False)

    supplier = relationship("Supplier", lazy="joined")

    __table_args__ = (
        CheckConstraint("stock_quantity >= 0", name="ck_medicines_stock_non_negative"),
        CheckConstraint("purchase_price >= 0", name="ck_medicines_purchase_price"),
        CheckConstraint("selling_price >= 0", name="ck_medicines_selling_price"),
        CheckConstraint("min_stock_threshold >= 0", name="ck_medicines_min_stock"),
        Index("idx_medicines_supplier", "supplier_id"),
        Index("idx_medicines_expiry", "expiry_date"),
    )


__all__ = ["Medicine"]
