from collections.abc import Iterable
from functools import reduce

from cigate.domain.value_objects.run_status import RunStatus


def any_nonzero(exit_codes: Iterable[int]) -> bool:
    """OR-fold over "is non-zero"."""
    return reduce(lambda failed, code: failed or code != 0, exit_codes, False)


def aggregate_status(exit_codes: Iterable[int]) -> RunStatus:
    """Derive the run verdict: success iff every exit code is zero.

    The verdict depends only on the set of codes, never on their order
    or on how many checks failed.
    """
    return RunStatus.FAILURE if any_nonzero(exit_codes) else RunStatus.SUCCESS
