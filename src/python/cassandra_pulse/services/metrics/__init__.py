from .cluster_metrics import ClusterGauges, ClusterMetrics
from .cluster_metrics_factory import ClusterMetricsFactory

__all__ = [
    "ClusterGauges",
    "ClusterMetrics",
    "ClusterMetricsFactory",
]
