import os

def is_production() -> bool:
    """Detects if running in production via PRODUCTION variable"""
    return os.getenv("PRODUCTION", "false").lower() == "true"

def get_database_url() -> str:
    """Returns SQLAlchemy database URL based on environment"""
    if is_production():
        return os.getenv("DATABASE_URL_PROD")
    return os.getenv(
        "DATABASE_URL",
        "postgresql+asyncpg://auto:p@localhost:5432/auto" # fallback
    )
