"""
Performance Monitoring
Prometheus-based metrics for the editor core
"""

from .metrics import MetricsCollector

__all__ = ["MetricsCollector"]
