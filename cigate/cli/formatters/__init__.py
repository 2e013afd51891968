from cigate.cli.formatters.report_formatter import (
    OUTCOME_LABELS,
    OUTCOME_STYLES,
    create_progress_callbacks,
    format_check_result,
    format_check_start,
    format_failure_details,
    format_fatal_error,
    format_report,
)

__all__ = [
    "OUTCOME_LABELS",
    "OUTCOME_STYLES",
    "create_progress_callbacks",
    "format_check_result",
    "format_check_start",
    "format_failure_details",
    "format_fatal_error",
    "format_report",
]
