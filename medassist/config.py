"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings
from typing import List, Literal, Optional

class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: Connection string for the record store (OPD slips, identification events)

        # Generation collaborator settings
        generation_api_url: Endpoint of the external draft generation service.
            When unset, the simulated backend is used.
        generation_api_key: Bearer token sent to the generation service
        generation_model: Model name forwarded to the generation service
        generation_timeout_seconds: Transport timeout for generation calls (None disables it)

        # Registry policies
        duplicate_patient_policy: What the registry does with a duplicate patient id
        unknown_patient_note_policy: What the registry does when a note targets an unknown patient

        # OPD settings
        default_department: Department printed on OPD slips
        opd_token_max_attempts: Attempts made to draw a token not yet issued

        # Frontend settings
        cors_origins: Origins allowed by the CORS middleware
    """
    # Database settings
    database_url: str = "sqlite:///./medassist.db"

    # Generation settings
    generation_api_url: Optional[str] = None
    generation_api_key: Optional[str] = None
    generation_model: str = "clinical-draft"
    generation_timeout_seconds: Optional[float] = 60.0

    # Registry policies
    duplicate_patient_policy: Literal["allow", "reject", "overwrite"] = "allow"
    unknown_patient_note_policy: Literal["ignore", "raise"] = "ignore"

    # OPD settings
    default_department: str = "General Medicine"
    opd_token_max_attempts: int = 20

    # Frontend settings
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:9002"]

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

# Create settings instance
settings = Settings()
