"""
kube_hpa_* metrics exporter for HorizontalPodAutoscaler objects
"""

__version__ = "1.0.0"
