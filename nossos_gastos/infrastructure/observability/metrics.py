"""Prometheus metrics for transaction volume, installment plans, investments and request latency"""

from prometheus_client import Counter, Histogram

# Ledger metrics
transactions_created_counter = Counter(
    "nossos_gastos_transactions_created_total",
    "Transaction rows saved",
    ["kind"],  # lump_sum | installment
)

installment_plan_size_histogram = Histogram(
    "nossos_gastos_installment_plan_size",
    "Number of installments per generated plan",
    buckets=[2, 3, 4, 6, 10, 12, 18, 24, 36, 48],
)

installment_groups_deleted_counter = Counter(
    "nossos_gastos_installment_groups_deleted_total",
    "Installment groups removed",
)

validation_failures_counter = Counter(
    "nossos_gastos_validation_failures_total",
    "Rejected transaction drafts",
)

investment_movements_counter = Counter(
    "nossos_gastos_investment_movements_total",
    "Investment deposits and withdrawals",
    ["type"],  # deposit | withdraw
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_transactions(row_count: int, is_installment: bool) -> None:
    """Count saved rows and the size of installment plans"""
    if is_installment:
        transactions_created_counter.labels(kind="installment").inc(row_count)
        installment_plan_size_histogram.observe(row_count)
    else:
        transactions_created_counter.labels(kind="lump_sum").inc(row_count)
