from cigate.domain.entities.check_result import CheckResult
from cigate.domain.entities.run_report import RunReport

__all__ = [
    "CheckResult",
    "RunReport",
]
