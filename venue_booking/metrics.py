"""
Prometheus Metrics Module
Version: 1.0

Counters that let operators tell user errors (rule violations, real
conflicts) apart from backend trouble (conflict check or catalog
unavailable).

Usage:
    from venue_booking.metrics import record_conflict_check

    record_conflict_check("failed", duration_seconds=0.8)
"""
from prometheus_client import Counter, Histogram, Info, REGISTRY
from prometheus_client import generate_latest


# =============================================================================
# APPLICATION INFO
# =============================================================================

APP_INFO = Info(
    'venue_booking_app',
    'Application information'
)


# =============================================================================
# RULE METRICS
# =============================================================================

RULE_VIOLATIONS = Counter(
    'venue_booking_rule_violations_total',
    'Eligibility rule violations shown to users',
    ['kind']  # 'timeline' or 'hours'
)


# =============================================================================
# CONFLICT CHECK METRICS
# =============================================================================

CONFLICT_CHECKS = Counter(
    'venue_booking_conflict_checks_total',
    'Conflict checks by outcome',
    ['outcome']  # 'clear', 'conflict', 'failed', 'stale'
)

CONFLICT_CHECK_FAILURES = Counter(
    'venue_booking_conflict_check_failures_total',
    'Conflict checks that could not reach the scheduling API',
    ['error_code']
)

CONFLICT_CHECK_DURATION = Histogram(
    'venue_booking_conflict_check_duration_seconds',
    'Conflict check round-trip duration',
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)


# =============================================================================
# CATALOG / SUBMISSION METRICS
# =============================================================================

CATALOG_LOAD_FAILURES = Counter(
    'venue_booking_catalog_load_failures_total',
    'Failed club/venue catalog loads'
)

SUBMISSIONS = Counter(
    'venue_booking_submissions_total',
    'Booking submissions by status',
    ['status']  # 'accepted', 'blocked', 'rejected'
)


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def set_app_info(version: str, environment: str):
    """Set application info metrics."""
    APP_INFO.info({
        'version': version,
        'environment': environment
    })


def record_conflict_check(outcome: str, duration_seconds: float):
    CONFLICT_CHECKS.labels(outcome=outcome).inc()
    CONFLICT_CHECK_DURATION.observe(duration_seconds)


def get_metrics() -> bytes:
    """Prometheus exposition text for the default registry."""
    return generate_latest(REGISTRY)
