"""cigate - run independent CI checks and aggregate their exit codes."""

__version__ = "0.1.0"
