"""
Append-only record tables for OPD slips and identification events.
"""
from sqlalchemy import Column, Integer, String, DateTime, JSON
from sqlalchemy.sql import func

from ..database import Base

class OpdSlipRecord(Base):
    """
    OPD Slip Record - A stored OPD slip

    Rows are written once and never updated.
    """
    __tablename__ = "opd_slips"

    id = Column(Integer, primary_key=True, index=True)
    slip_id = Column(String, nullable=False, index=True)
    patient_id = Column(String, nullable=False, index=True)
    patient_name = Column(String, nullable=False)
    patient_age = Column(Integer, nullable=False)
    patient_gender = Column(String, nullable=False)
    token_number = Column(String, nullable=False, index=True)
    slip_date = Column(DateTime(timezone=True), nullable=False)
    department = Column(String, nullable=False)
    doctor_name = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<OpdSlipRecord(id={self.id}, slip_id='{self.slip_id}', token='{self.token_number}')>"


class IdentificationEventRecord(Base):
    __tablename__ = "identification_events"

    id = Column(Integer, primary_key=True, index=True)
    log_id = Column(String, nullable=False, unique=True, index=True)
    patient_id = Column(String, nullable=False, index=True)
    identification_timestamp = Column(DateTime(timezone=True), nullable=False)
    method = Column(String, nullable=False)
    source = Column(String, nullable=False, default="unknown")
    details = Column(JSON, nullable=True)  # captured data snapshot reference
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    def __repr__(self):
        return f"<IdentificationEventRecord(id={self.id}, log_id='{self.log_id}', patient_id='{self.patient_id}')>"
