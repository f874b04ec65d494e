import logging
from dataclasses import dataclass
from typing import Optional

from riskmap.models.assessment import AssessmentRequest, AssessmentResult
from riskmap.orchestrator.record_builder import build_assessment_record
from riskmap.reference.loader import ReferenceData
from riskmap.scoring.engine import compute_risk
from riskmap.storage import AssessmentStorage
from riskmap.scoring.validator import dedupe_countries

logger = logging.getLogger("riskmap.orchestrator")


@dataclass(frozen=True)
class AssessmentOutcome:
    result: AssessmentResult
    assessment_id: Optional[str] = None

    @property
    def persisted(self) -> bool:
        return self.assessment_id is not None


def run_assessment(
    request: AssessmentRequest,
    reference: ReferenceData,
    storage: Optional[AssessmentStorage] = None,
) -> AssessmentOutcome:
    """
    Compute first, then persist best-effort.

    A ValidationError propagates and nothing is stored. A storage failure
    is logged and swallowed; the computed result is returned unchanged.
    """
    result = compute_risk(request, reference)

    if storage is None:
        return AssessmentOutcome(result=result)

    try:
        record = build_assessment_record(
            result=result,
            countries=dedupe_countries(request.countries),
        )
        storage.commit_record(record)
    except Exception as e:
        logger.error(f"Failed to persist assessment: {type(e).__name__}: {e}")
        return AssessmentOutcome(result=result)

    return AssessmentOutcome(result=result, assessment_id=record.assessment_id)
