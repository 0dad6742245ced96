"""
Prometheus Metrics Registration.

Tool-call counters and latency histograms recorded by the dispatcher.
"""

from prometheus_client import Counter, Histogram, start_http_server

# ============================================================================
# COUNTERS
# ============================================================================

tool_executions_total = Counter(
    "tool_executions_total",
    "Total tool executions",
    ["tool_name", "status"],  # success, failure
)

# ============================================================================
# HISTOGRAMS
# ============================================================================

tool_execution_duration = Histogram(
    "tool_execution_duration_seconds",
    "Tool execution duration",
    ["tool_name"],
    buckets=(0.1, 0.5, 1.0, 2.0, 5.0, 10.0, 30.0),
)


def start_metrics_server(port: int) -> bool:
    """Expose metrics over HTTP when a port is configured.

    Returns:
        True if the exporter was started
    """
    if not port:
        return False
    start_http_server(port)
    return True
