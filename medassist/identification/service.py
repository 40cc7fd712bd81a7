"""
Identification Service - Audit logging of patient identification events.
"""
import logging
import random
import string
import time

from .schemas import IdentificationEventCreate, IdentificationLogResponse

# Set up logging
logger = logging.getLogger(__name__)

def generate_log_id() -> str:
    """Generate a log id: log-<epoch millis>-<7 base36 chars>."""
    suffix = "".join(random.choices(string.ascii_lowercase + string.digits, k=7))
    return f"log-{int(time.time() * 1000)}-{suffix}"

async def log_identification_event(store, event: IdentificationEventCreate) -> IdentificationLogResponse:
    """
    Log that a patient was identified.

    Args:
        store: RecordStore receiving the event
        event: Identification event

    Returns:
        IdentificationLogResponse: Log id and confirmation message

    Raises:
        PersistenceException: If the store rejects the event
    """
    log_id = generate_log_id()
    logger.info(f"Logging identification of patient {event.patient_id} via {event.method}")

    await store.save_identification_event(log_id, event)

    return IdentificationLogResponse(
        log_id=log_id,
        message=f"Identification event for patient {event.patient_id} logged successfully. Log ID: {log_id}"
    )
