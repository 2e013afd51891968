from cigate.application.use_cases.run_pipeline import RunPipeline

__all__ = ["RunPipeline"]
