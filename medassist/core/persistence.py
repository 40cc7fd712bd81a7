"""
Record store - persistence collaborator for OPD slips and identification events.

Writes are append-only; the application never reads these records back.
"""
from typing import Callable
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import logging

from ..exceptions import PersistenceException
from ..opd.schemas import OpdSlip
from ..identification.schemas import IdentificationEventCreate
from .models import OpdSlipRecord, IdentificationEventRecord

# Set up logging
logger = logging.getLogger(__name__)

class RecordStore:
    """
    Interface of the external record store.

    Each save returns the store-assigned identifier or raises
    PersistenceException.
    """
    async def save_opd_slip(self, slip: OpdSlip) -> str:
        raise NotImplementedError

    async def save_identification_event(self, log_id: str, event: IdentificationEventCreate) -> str:
        raise NotImplementedError


class SqlAlchemyRecordStore(RecordStore):
    """
    Record store backed by SQLAlchemy.

    Args:
        session_factory: Callable returning a new Session (e.g. SessionLocal)
    """
    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    async def save_opd_slip(self, slip: OpdSlip) -> str:
        record = OpdSlipRecord(
            slip_id=slip.id,
            patient_id=slip.patient_id,
            patient_name=slip.patient_name,
            patient_age=slip.patient_age,
            patient_gender=slip.patient_gender,
            token_number=slip.token_number,
            slip_date=slip.slip_date,
            department=slip.department,
            doctor_name=slip.doctor_name,
        )
        record_id = self._add(record, f"OPD slip {slip.id}")
        logger.info(f"OPD slip {slip.id} stored as record {record_id}")
        return record_id

    async def save_identification_event(self, log_id: str, event: IdentificationEventCreate) -> str:
        details = None
        if event.captured_data_snapshot:
            details = {"captured_data_snapshot": event.captured_data_snapshot}

        record = IdentificationEventRecord(
            log_id=log_id,
            patient_id=event.patient_id,
            identification_timestamp=event.identification_timestamp,
            method=event.method,
            source=event.source or "unknown",
            details=details,
        )
        record_id = self._add(record, f"identification event {log_id}")
        logger.info(f"Identification event {log_id} stored as record {record_id}")
        return record_id

    def _add(self, record, description: str) -> str:
        db = self.session_factory()
        try:
            db.add(record)
            db.commit()
            db.refresh(record)
            return str(record.id)
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Error saving {description}: {str(e)}")
            raise PersistenceException(f"Could not save {description}")
        finally:
            db.close()
