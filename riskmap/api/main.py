import logging
import time
from typing import Dict, Any, List, Optional
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from riskmap.config import get_settings
from riskmap.models.assessment import AssessmentRequest
from riskmap.models.errors import ValidationError
from riskmap.models.strategy import normalize_strategy_map
from riskmap.orchestrator.assessment_service import run_assessment
from riskmap.reference.loader import load_reference_data
from riskmap.storage import build_storage
from riskmap.telemetry import (
    init_telemetry,
    emit_assessment_telemetry,
    emit_exception_telemetry,
)

settings = get_settings()

# --- 1. SETUP AUDIT LOGGING ---
logging.basicConfig(
    filename=settings.audit_log,
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
audit_logger = logging.getLogger("audit")

# --- 2. REFERENCE DATA & RESULT SINK (loaded once) ---
reference = load_reference_data(settings.reference_snapshot)
storage = build_storage(settings)

tags_metadata = [
    {
        "name": "Assessment",
        "description": "Scores an industry / country / HRDD strategy mix.",
    },
    {
        "name": "Reference",
        "description": "Country and industry reference tables.",
    },
    {
        "name": "System",
        "description": "Health checks and operational metadata.",
    },
]

app = FastAPI(
    title="RiskMap Labor Rights Risk API",
    description="""
    **Labor-rights risk assessment** for supply-chain sourcing decisions.

    * **Base risk:** per-country labor-rights rating.
    * **Industry multiplier:** sector exposure.
    * **HRDD multiplier:** mitigation from the monitoring-strategy mix (0.5 - 1.5).
    * **Activity weighting:** overall score weighted by business volume per country.
    """,
    version="1.0.0",
    openapi_tags=tags_metadata,
    docs_url="/docs",
    redoc_url="/redoc"
)

init_telemetry()


# --- 3. MIDDLEWARE: AUDIT TRAIL ---
@app.middleware("http")
async def audit_middleware(request: Request, call_next):
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time

    client_host = request.client.host if request.client else "unknown"
    audit_logger.info(
        f"METHOD={request.method} PATH={request.url.path} "
        f"STATUS={response.status_code} CLIENT={client_host} "
        f"DURATION={process_time:.4f}s"
    )
    return response


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    audit_logger.info(f"VALIDATION_ERROR: reason={exc.reason.value}")
    return JSONResponse(status_code=400, content=exc.to_dict())


# --- DATA MODELS ---
class CalculateRiskRequest(BaseModel):
    industry: str = ""
    countries: List[str] = []
    hrdd_strategies: Optional[Dict[str, float]] = None
    hrdd_effectiveness: Optional[Dict[str, float]] = None
    activity_volumes: Optional[Dict[str, Any]] = None


class RiskResponse(BaseModel):
    overall_risk: int
    risk_level: str
    mode: str
    industry: str
    industry_multiplier: float
    hrdd_multiplier: float
    country_risks: List[Dict[str, Any]]
    total_activity: Optional[float] = None
    hrdd_data: Optional[Dict[str, Any]] = None
    assessment_id: Optional[str] = None


def to_assessment_request(body: CalculateRiskRequest) -> AssessmentRequest:
    """Boundary conversion: strategy keys may arrive hyphenated or underscored."""
    return AssessmentRequest(
        industry=body.industry,
        countries=list(body.countries),
        strategy_coverage=normalize_strategy_map(body.hrdd_strategies),
        strategy_effectiveness=normalize_strategy_map(body.hrdd_effectiveness),
        activity_volumes=body.activity_volumes,
    )


# --- ENDPOINTS ---

@app.post("/api/calculate-risk", response_model=RiskResponse, tags=["Assessment"])
def calculate_risk(body: CalculateRiskRequest):
    """
    Score the selected countries for one industry and HRDD strategy mix.
    """
    try:
        start_time = time.perf_counter()

        request = to_assessment_request(body)
        outcome = run_assessment(request, reference, storage)

        latency_ms = int((time.perf_counter() - start_time) * 1000)
        emit_assessment_telemetry(
            latency_ms=latency_ms,
            overall_risk=outcome.result.overall_risk,
            scoring_mode=outcome.result.mode,
            country_count=len(outcome.result.country_risks),
            persisted=outcome.persisted,
        )

        response = outcome.result.to_dict()
        response["assessment_id"] = outcome.assessment_id
        return response

    except ValidationError:
        raise
    except Exception as e:
        emit_exception_telemetry(e)
        audit_logger.error(f"ENGINE_ERROR: {type(e).__name__}")
        raise HTTPException(status_code=500, detail="Internal server error")


@app.get("/api/countries", tags=["Reference"])
def list_countries():
    return [c.to_dict() for c in reference.countries]


@app.get("/api/industries", tags=["Reference"])
def list_industries():
    return [i.to_dict() for i in reference.industries]


@app.get("/api/country/{identifier}", tags=["Reference"])
def get_country(identifier: str):
    """Lookup by ISO code or (partial) country name."""
    country = reference.find_country(identifier)
    if country is None:
        raise HTTPException(status_code=404, detail="Country not found")
    return country.to_dict()


@app.get("/api/industry/{name}", tags=["Reference"])
def get_industry(name: str):
    industry = reference.find_industry(name)
    if industry is None:
        raise HTTPException(status_code=404, detail="Industry not found")
    return industry.to_dict()


@app.get("/api/assessment/{assessment_id}", tags=["Assessment"])
def get_assessment(assessment_id: str):
    if storage is None:
        raise HTTPException(status_code=404, detail="Assessment not found")

    record = storage.get_record(assessment_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Assessment not found")
    return record.to_dict()


@app.get("/api/assessments/recent", tags=["Assessment"])
def recent_assessments(limit: int = Query(10, ge=1, le=100)):
    if storage is None:
        return []

    records = []
    for record in storage.recent_records(limit):
        # activity data can be large; detail view only
        payload = record.to_dict()
        payload.pop("activity_data", None)
        records.append(payload)
    return records


@app.get("/health", tags=["System"])
def health():
    return {
        "status": "online",
        "reference_snapshot": reference.snapshot_version,
        "storage": settings.storage_backend,
        "modules": ["Validator", "HRDD", "CountryAdjuster", "ActivityWeighter", "AssessmentLog"]
    }
