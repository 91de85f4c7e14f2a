"""Top-level platform monitoring helpers.

Usage: from platform_monitoring import log_event, prometheus_metric
"""
from .exporters import log_event, prometheus_metric, render_latest, sample_value

__all__ = ["log_event", "prometheus_metric", "render_latest", "sample_value"]
