"""CLI theme configuration - all colors in one place.

Colors use Rich markup syntax (e.g., "green", "bold red", "dim italic").
"""


class Theme:
    """Terminal color theme for the cigate CLI."""

    # -------------------------------------------------------------------------
    # Status colors
    # -------------------------------------------------------------------------
    SUCCESS = "green"
    SUCCESS_BOLD = "bold green"
    ERROR = "red"
    ERROR_BOLD = "bold red"
    WARNING = "yellow"
    INFO = "cyan"

    # -------------------------------------------------------------------------
    # Text styles
    # -------------------------------------------------------------------------
    DIM = "grey62"
    COMMAND = "grey74"

    # -------------------------------------------------------------------------
    # Check outcomes
    # -------------------------------------------------------------------------
    OUTCOME_PASSED = "bold green"
    OUTCOME_FAILED = "bold red"
    OUTCOME_LAUNCH_FAILED = "bold magenta"
    OUTCOME_TIMED_OUT = "bold yellow"

    # -------------------------------------------------------------------------
    # Panel borders
    # -------------------------------------------------------------------------
    BORDER_ERROR = "red"
    BORDER_WARNING = "yellow"


# Default theme instance - import this in other modules
theme = Theme()
