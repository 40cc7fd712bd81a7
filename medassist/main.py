"""
Main FastAPI application entry point.
Configures the application, middleware, shared services and routers.
"""
from dotenv import load_dotenv

# Load environment variables from .env file first
load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
from .patients.router import router as patients_router
from .clinical_drafts.router import router as drafts_router
from .opd.router import router as opd_router
from .identification.router import router as identification_router
from .patients.registry import PatientRegistry
from .clinical_drafts.generation import build_draft_generator
from .opd.service import OpdTokenIssuer
from .core.persistence import SqlAlchemyRecordStore
from .database import engine, SessionLocal, Base
from .config import settings
from .exceptions import register_exception_handlers
from .core.middleware import setup_middlewares

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create database tables if they don't exist
Base.metadata.create_all(bind=engine)

logger.info("🚀 Starting MedAssist API...")

# Create FastAPI application
app = FastAPI(
    title="MedAssist API",
    description="Patient registration, OPD slips and AI-assisted clinical drafts",
    version="1.0.0"
)

# Shared services, replaced in tests through dependency overrides
app.state.registry = PatientRegistry(
    duplicate_policy=settings.duplicate_patient_policy,
    unknown_patient_policy=settings.unknown_patient_note_policy
)
app.state.draft_generator = build_draft_generator(settings)
app.state.record_store = SqlAlchemyRecordStore(SessionLocal)
app.state.token_issuer = OpdTokenIssuer(max_attempts=settings.opd_token_max_attempts)

# Register exception handlers
register_exception_handlers(app)

# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Setup custom middleware
setup_middlewares(app)

# Include routers
app.include_router(patients_router, prefix="/api/v1/patients", tags=["Patients"])
app.include_router(drafts_router, prefix="/api/v1/drafts", tags=["Clinical Drafts"])
app.include_router(opd_router, prefix="/api/v1/opd-slips", tags=["OPD"])
app.include_router(identification_router, prefix="/api/v1/identification-events", tags=["Identification"])

# Root endpoint
@app.get("/")
def root():
    """
    Root endpoint for API health check.

    Returns:
        dict: Welcome message and API version
    """
    return {"message": "Welcome to MedAssist API", "version": app.version}

# Health check endpoint
@app.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring.

    Returns:
        dict: Health status information
    """
    return {"status": "healthy", "patients": len(app.state.registry)}
