"""
SwiftGuard - Metrics Collection

Prometheus metrics for the validation pipeline.
"""

from typing import Optional

from prometheus_client import Counter, Histogram

MESSAGES_PROCESSED = Counter(
    "swiftguard_messages_processed_total",
    "Total MT103 messages processed by verdict status",
    ["status"],
)

COMPLIANCE_RULE_HITS = Counter(
    "swiftguard_compliance_rule_hits_total",
    "Compliance rule rejections by rule",
    ["rule"],
)

STRUCTURAL_ERRORS = Counter(
    "swiftguard_structural_errors_total",
    "Structural validation errors by schema keyword",
    ["keyword"],
)

PIPELINE_DURATION = Histogram(
    "swiftguard_pipeline_duration_seconds",
    "Duration of parse, validate and screen for one message",
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25),
)

PIPELINE_FAULTS = Counter(
    "swiftguard_pipeline_faults_total",
    "Unexpected exceptions raised inside the validation pipeline",
    ["exception"],
)


def record_verdict(
    status: str,
    duration: float,
    rule: Optional[str] = None,
    structural_keywords: Optional[list] = None,
) -> None:
    """Record metrics for one processed message."""
    MESSAGES_PROCESSED.labels(status=status).inc()
    PIPELINE_DURATION.observe(duration)

    if rule:
        COMPLIANCE_RULE_HITS.labels(rule=rule).inc()

    for keyword in structural_keywords or []:
        STRUCTURAL_ERRORS.labels(keyword=keyword or "unknown").inc()


def record_fault(exception: BaseException) -> None:
    """Record an unexpected pipeline exception."""
    PIPELINE_FAULTS.labels(exception=type(exception).__name__).inc()
