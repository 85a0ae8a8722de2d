from .mig import GpuModeRecord, MigAnalysis, MigState, ReconcileAction

__all__ = ["GpuModeRecord", "MigAnalysis", "MigState", "ReconcileAction"]
