"""Candidate selection: keep the single largest region."""

from typing import Optional, Sequence

from facecue.types import CandidateRegion


def select_largest(candidates: Sequence[CandidateRegion]) -> Optional[CandidateRegion]:
    """Return the candidate with the largest area.

    Ties keep the earliest candidate in scan order.

    Returns:
        The selected region, or None if there are no candidates.
    """
    return max(candidates, key=lambda r: r.area, default=None)


__all__ = ["select_largest"]
