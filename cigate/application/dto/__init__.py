from cigate.application.dto.pipeline_config import (
    PipelineConfig,
    default_checks,
    default_toolchain,
)

__all__ = [
    "PipelineConfig",
    "default_checks",
    "default_toolchain",
]
