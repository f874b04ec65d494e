import hashlib
import json
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from riskmap.models.assessment import AssessmentResult
from riskmap.models.assessment_record import AssessmentRecord


def compute_record_hash(payload: Dict[str, Any]) -> str:
    """
    SHA-256 over the canonical JSON of a record (sorted keys, no whitespace),
    leaving out the record_hash field itself.
    """
    canonical = {k: v for k, v in payload.items() if k != "record_hash"}
    serialized = json.dumps(canonical, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()


def verify_record_hash(record: AssessmentRecord) -> bool:
    return compute_record_hash(record.to_dict()) == record.record_hash


def build_assessment_record(
    *,
    result: AssessmentResult,
    countries: list,
    assessment_id: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> AssessmentRecord:
    """
    Builds a single immutable AssessmentRecord from a computed result.
    The hash is taken over the JSON form, so it is stable across backends.
    """
    assessment_id = assessment_id or uuid.uuid4().hex
    created_at = created_at or datetime.now(timezone.utc)

    hrdd_strategies = {}
    hrdd_effectiveness = {}
    if result.hrdd is not None:
        hrdd_strategies = {s.value: v for s, v in result.hrdd.coverage.items()}
        hrdd_effectiveness = {s.value: v for s, v in result.hrdd.effectiveness.items()}

    activity_data = {
        cr.country: cr.activity_level
        for cr in result.country_risks
        if cr.activity_level is not None
    }

    country_scores = [
        {
            "country": cr.country,
            "risk_score": cr.risk,
            "base_risk_score": cr.base_risk,
            "activity_level": cr.activity_level,
            "weight": cr.weight,
        }
        for cr in result.country_risks
    ]

    # -------------------------------
    # Canonical payload (NO hash yet)
    # -------------------------------
    payload = dict(
        assessment_id=assessment_id,
        created_at=created_at.isoformat(),
        industry=result.industry,
        countries=list(countries),
        hrdd_strategies=hrdd_strategies,
        hrdd_effectiveness=hrdd_effectiveness,
        activity_data=activity_data,
        overall_risk_score=result.overall_risk,
        country_scores=country_scores,
        hrdd_multiplier=result.hrdd_multiplier,
        total_activity=result.total_activity,
    )

    return AssessmentRecord(
        assessment_id=assessment_id,
        created_at=created_at,
        industry=result.industry,
        countries=list(countries),
        hrdd_strategies=hrdd_strategies,
        hrdd_effectiveness=hrdd_effectiveness,
        activity_data=activity_data,
        overall_risk_score=result.overall_risk,
        country_scores=country_scores,
        hrdd_multiplier=result.hrdd_multiplier,
        total_activity=result.total_activity,
        record_hash=compute_record_hash(payload),
    )
