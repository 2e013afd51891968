from cigate.domain.services.aggregation import aggregate_status, any_nonzero

__all__ = ["aggregate_status", "any_nonzero"]
