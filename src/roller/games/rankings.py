"""Player rankings from final scores."""

from collections.abc import Sequence


def rankings(sorted_scores: Sequence[int]) -> list[int]:
    """Dense ranks for scores already sorted in descending order.

    Tied scores share a rank and the next lower score takes the next rank:

    Example:
        >>> rankings([5, 5, 4, 3, 3, 2, 1])
        [1, 1, 2, 3, 3, 4, 5]
    """
    ranks = []
    current = 1
    for index, score in enumerate(sorted_scores):
        if index > 0 and sorted_scores[index - 1] > score:
            current += 1
        ranks.append(current)
    return ranks
