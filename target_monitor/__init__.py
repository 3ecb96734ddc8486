"""
Target Price Monitor - checks current market prices against target prices.

This package periodically fetches quotes for a configured list of securities,
classifies each as sell-recommended or held relative to its target price,
and delivers a consolidated report to a messaging channel during market hours.
"""

__version__ = "0.1.0"

# Lazy imports to avoid dependency issues during package setup
__all__ = [
    "ConfigurationManager",
    "MonitorConfig",
    "TargetEntry",
    "MonitorSystem",
    "CycleReport",
    "EvaluationResult",
    "Classification",
    "CycleScheduler",
    "ReportFormatter",
]


def __getattr__(name):
    """Lazy import for package components."""
    if name == "ConfigurationManager":
        from .config import ConfigurationManager
        return ConfigurationManager
    elif name == "MonitorConfig":
        from .config import MonitorConfig
        return MonitorConfig
    elif name == "TargetEntry":
        from .config import TargetEntry
        return TargetEntry
    elif name == "MonitorSystem":
        from .monitor_system import MonitorSystem
        return MonitorSystem
    elif name == "CycleReport":
        from .models import CycleReport
        return CycleReport
    elif name == "EvaluationResult":
        from .evaluation import EvaluationResult
        return EvaluationResult
    elif name == "Classification":
        from .evaluation import Classification
        return Classification
    elif name == "CycleScheduler":
        from .scheduler import CycleScheduler
        return CycleScheduler
    elif name == "ReportFormatter":
        from .reporting import ReportFormatter
        return ReportFormatter
    else:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
