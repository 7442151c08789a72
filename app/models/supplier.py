from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import relationship

from app.database.base import Base, TimestampMixin

# Stored back-reference set; written only through app.services.supplier_links.
supplier_medicines = Table(
    "supplier_medicines",
    Base.metadata,
    Column("supplier_id", Integer, ForeignKey("suppliers.id", ondelete="CASCADE"), primary_key=True),
    Column("medicine_id", Integer, ForeignKey("medicines.id", ondelete="CASCADE"), primary_key=True),
)


class Supplier(TimestampMixin, Base):
    __tablename__ = "suppliers"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    contact = Column(String, nullable=False)
    email = Column(String, nullable=False, unique=True)
    address = Column(String, nullable=False)

    supplied_medicines = relationship(
        "Medicine",
        secondary=supplier_medicines,
        viewonly=True,
        order_by="Medicine.id",
    )


__all__ = ["Supplier", "supplier_medicines"]
