from cigate.application.check_orchestrator import (
    CheckCompleteCallback,
    CheckOrchestrator,
    CheckStartCallback,
)
from cigate.application.use_cases.run_pipeline import RunPipeline

__all__ = [
    "CheckCompleteCallback",
    "CheckOrchestrator",
    "CheckStartCallback",
    "RunPipeline",
]
