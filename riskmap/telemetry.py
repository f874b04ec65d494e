"""
Assessment telemetry.

Only aggregate figures leave the process: no company names, no country
lists, no activity volumes.
"""
import os
import logging
from typing import Literal
from azure.monitor.opentelemetry import configure_azure_monitor
from opentelemetry.trace import get_current_span

logger = logging.getLogger("riskmap.telemetry")


def init_telemetry():
    """
    Initialize Azure Application Insights via OpenTelemetry.
    No-op unless a connection string is configured.
    """
    connection_string = os.getenv("AZURE_APPINSIGHTS_CONNECTION_STRING")

    if not connection_string:
        return  # Telemetry disabled (local / tests)

    configure_azure_monitor(
        connection_string=connection_string
    )
    logger.info("Azure Monitor telemetry configured")


def emit_assessment_telemetry(
    latency_ms: int,
    overall_risk: int,
    scoring_mode: Literal["simple", "activity_weighted"],
    country_count: int,
    persisted: bool,
):
    """
    Emit the single custom event for a completed assessment.

    Attributes are fixed:
    - latency_ms: int
    - overall_risk: int
    - scoring_mode: Literal["simple", "activity_weighted"]
    - country_count: int
    - persisted: bool
    """
    assert isinstance(latency_ms, int), "latency_ms must be int"
    assert isinstance(overall_risk, int), "overall_risk must be int"
    assert scoring_mode in ("simple", "activity_weighted"), f"scoring_mode must be one of ('simple', 'activity_weighted'), got {scoring_mode}"
    assert isinstance(country_count, int), "country_count must be int"
    assert isinstance(persisted, bool), "persisted must be bool"

    span = get_current_span()
    if not span:
        return  # No active span - telemetry disabled or not in trace context

    span.add_event(
        name="riskmap.assessment",
        attributes={
            "latency_ms": latency_ms,
            "overall_risk": overall_risk,
            "scoring_mode": scoring_mode,
            "country_count": country_count,
            "persisted": persisted,
        }
    )


def scrub_exception_for_telemetry(exception: Exception) -> str:
    """
    Never send str(e): it can echo request content.
    Log only the exception class name.
    """
    return type(exception).__name__


def emit_exception_telemetry(exception: Exception):
    span = get_current_span()
    if not span:
        return

    span.add_event(
        name="riskmap.exception",
        attributes={
            "exception_type": scrub_exception_for_telemetry(exception)
        }
    )
