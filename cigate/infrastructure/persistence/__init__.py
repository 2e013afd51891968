from cigate.infrastructure.persistence.report_store import ReportStore

__all__ = ["ReportStore"]
