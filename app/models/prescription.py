from sqlalchemy import Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from app.core.constants import DEFAULT_PRESCRIPTION_STATUS, PRESCRIPTION_STATUSES
from app.database.base import Base, TimestampMixin, one_of


class Prescription(TimestampMixin, Base):
    __tablename__ = "prescriptions"

    id = Column(Integer, primary_key=True)
    prescription_number = Column(String, nullable=False, unique=True)
    patient_name = Column(String, nullable=False)
    doctor_name = Column(String, nullable=False)
    status = Column(String, nullable=False, default=DEFAULT_PRESCRIPTION_STATUS)

    items = relationship(
        "PrescriptionItem",
        cascade="all, delete-orphan",
        order_by="PrescriptionItem.position",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_prescriptions_status", "status"),
        one_of("status", PRESCRIPTION_STATUSES, name="ck_prescriptions_status"),
    )


class PrescriptionItem(Base):
    __tablename__ = "prescription_items"

    id = Column(Integer, primary_key=True)
    prescription_id = Column(
        Integer,
        ForeignKey("prescriptions.id", ondelete="CASCADE"),
        nullable=False,
    )
    position = Column(Integer, nullable=False, default=0)
    medicine_id = Column(Integer, ForeignKey("medicines.id", ondelete="SET NULL"))
    dosage = Column(String, nullable=False)
    duration = Column(String, nullable=False)

    medicine = relationship("Medicine", lazy="joined")


__all__ = ["Prescription", "PrescriptionItem"]
