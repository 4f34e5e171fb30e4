"""Vote share arithmetic."""

from typing import Tuple


def calculate_vote_percentages(votes_a: int = 0, votes_b: int = 0) -> Tuple[int, int]:
    """
    Turn two vote counts into whole-number percentages.

    Option A's share is rounded half-up (12.5 -> 13) using integer arithmetic,
    so there is no float error at the .5 boundary. Option B always gets the
    remainder, which keeps the pair summing to exactly 100. With no votes at
    all the result is ``(0, 0)``.
    """
    if votes_a < 0 or votes_b < 0:
        raise ValueError(f"Vote counts must be non-negative, got ({votes_a}, {votes_b})")

    total = votes_a + votes_b
    if total == 0:
        return 0, 0

    percentage_a = (200 * votes_a + total) // (2 * total)
    return percentage_a, 100 - percentage_a
