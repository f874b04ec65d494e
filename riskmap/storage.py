import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional

from azure.core.exceptions import ResourceNotFoundError
from azure.storage.blob import BlobClient, ContainerClient

from riskmap.models.assessment_record import AssessmentRecord
from riskmap.orchestrator.record_builder import verify_record_hash

logger = logging.getLogger("riskmap.storage")


class AssessmentStorage(ABC):
    """
    Append-only persistence boundary for assessment records.
    Verifies the record hash before every write.
    """

    def commit_record(self, record: AssessmentRecord) -> None:
        if not verify_record_hash(record):
            raise ValueError("Assessment record hash mismatch")
        self._write(record.assessment_id, record.to_dict())

    @abstractmethod
    def get_record(self, assessment_id: str) -> Optional[AssessmentRecord]:
        ...

    @abstractmethod
    def recent_records(self, limit: int = 10) -> List[AssessmentRecord]:
        ...

    @abstractmethod
    def _write(self, assessment_id: str, payload: dict) -> None:
        ...


class LocalAssessmentStorage(AssessmentStorage):
    """One JSON file per assessment inside a vault directory."""

    def __init__(self, vault_dir: str = "assessment_vault"):
        self.vault_dir = Path(vault_dir)

    def _path(self, assessment_id: str) -> Path:
        return self.vault_dir / f"assessment_{assessment_id}.json"

    def _write(self, assessment_id: str, payload: dict) -> None:
        self.vault_dir.mkdir(parents=True, exist_ok=True)
        path = self._path(assessment_id)

        # "x" mode: records are never overwritten
        with open(path, "x", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

        logger.info(f"Assessment {assessment_id} committed to {path}")

    def get_record(self, assessment_id: str) -> Optional[AssessmentRecord]:
        # Ids are hex uuids; anything with a path separator is not ours
        if not assessment_id or "/" in assessment_id or "\\" in assessment_id:
            return None

        path = self._path(assessment_id)
        if not path.exists():
            return None

        with open(path, "r", encoding="utf-8") as f:
            return AssessmentRecord.from_dict(json.load(f))

    def recent_records(self, limit: int = 10) -> List[AssessmentRecord]:
        if not self.vault_dir.exists():
            return []

        records = []
        for path in self.vault_dir.glob("assessment_*.json"):
            with open(path, "r", encoding="utf-8") as f:
                records.append(AssessmentRecord.from_dict(json.load(f)))

        records.sort(key=lambda r: r.created_at, reverse=True)
        return records[:limit]


class BlobAssessmentStorage(AssessmentStorage):
    """
    Azure Blob Storage backend. Uploads with overwrite=False so the
    container can be put under an immutability (WORM) policy.
    """

    def __init__(
        self,
        connection_string: str,
        container_name: str,
    ):
        self.connection_string = connection_string
        self.container_name = container_name

    def _get_blob_client(self, blob_name: str) -> BlobClient:
        return BlobClient.from_connection_string(
            conn_str=self.connection_string,
            container_name=self.container_name,
            blob_name=blob_name,
        )

    def _get_container_client(self) -> ContainerClient:
        return ContainerClient.from_connection_string(
            conn_str=self.connection_string,
            container_name=self.container_name,
        )

    def _write(self, assessment_id: str, payload: dict) -> None:
        blob_client = self._get_blob_client(blob_name=f"{assessment_id}.json")
        blob_client.upload_blob(
            data=json.dumps(payload, indent=2),
            overwrite=False
        )
        logger.info(f"Assessment {assessment_id} uploaded to {self.container_name}")

    def get_record(self, assessment_id: str) -> Optional[AssessmentRecord]:
        blob_client = self._get_blob_client(blob_name=f"{assessment_id}.json")
        try:
            data = blob_client.download_blob().readall()
        except ResourceNotFoundError:
            return None
        return AssessmentRecord.from_dict(json.loads(data))

    def recent_records(self, limit: int = 10) -> List[AssessmentRecord]:
        container = self._get_container_client()
        blobs = sorted(
            container.list_blobs(),
            key=lambda b: b.last_modified,
            reverse=True,
        )[:limit]

        records = []
        for blob in blobs:
            data = container.download_blob(blob.name).readall()
            records.append(AssessmentRecord.from_dict(json.loads(data)))
        return records


def build_storage(settings) -> Optional[AssessmentStorage]:
    """Selects the result sink from settings; None disables persistence."""
    backend = settings.storage_backend

    if backend == "none":
        return None

    if backend == "azure":
        if not settings.azure_storage_connection_string:
            raise ValueError(
                "RISKMAP_STORAGE=azure requires AZURE_STORAGE_CONNECTION_STRING"
            )
        return BlobAssessmentStorage(
            connection_string=settings.azure_storage_connection_string,
            container_name=settings.blob_container,
        )

    if backend == "local":
        return LocalAssessmentStorage(settings.vault_dir)

    raise ValueError(f"Unknown storage backend: {backend}")
