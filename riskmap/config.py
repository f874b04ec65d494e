import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from riskmap.reference.loader import DEFAULT_SNAPSHOT_VERSION

load_dotenv()


@dataclass(frozen=True)
class Settings:
    reference_snapshot: str = DEFAULT_SNAPSHOT_VERSION
    storage_backend: str = "local"  # local | azure | none
    vault_dir: str = "assessment_vault"
    azure_storage_connection_string: Optional[str] = None
    blob_container: str = "assessments"
    audit_log: str = "audit.log"
    api_url: str = "http://localhost:8000/api"
    api_timeout: float = 5.0


def get_settings() -> Settings:
    """
    Reads settings from the environment (and .env, if present).
    Called at startup; values are not re-read per request.
    """
    return Settings(
        reference_snapshot=os.getenv("RISKMAP_REFERENCE_SNAPSHOT", DEFAULT_SNAPSHOT_VERSION),
        storage_backend=os.getenv("RISKMAP_STORAGE", "local").strip().lower(),
        vault_dir=os.getenv("RISKMAP_VAULT_DIR", "assessment_vault"),
        azure_storage_connection_string=os.getenv("AZURE_STORAGE_CONNECTION_STRING"),
        blob_container=os.getenv("RISKMAP_BLOB_CONTAINER", "assessments"),
        audit_log=os.getenv("RISKMAP_AUDIT_LOG", "audit.log"),
        api_url=os.getenv("RISKMAP_API_URL", "http://localhost:8000/api").rstrip("/"),
        api_timeout=float(os.getenv("RISKMAP_API_TIMEOUT", "5.0")),
    )
