"""
Cartesian products used to build module discovery targets.
"""

from functools import reduce
from typing import List, Sequence

from .types import CrossProduct3, CrossProductFailure, CrossProductSuccess


def cross_product(data: Sequence[Sequence[str]]) -> List[List[str]]:
    """Every ordered combination taking one item from each input, first input slowest."""
    return reduce(
        lambda memo, items: [combo + [item] for combo in memo for item in items],
        data,
        [[]],
    )


def cross_product3(data1: Sequence[str], data2: Sequence[str], data3: Sequence[str]) -> CrossProduct3:
    if not data1 or not data2 or not data3:
        return CrossProductFailure()

    return CrossProductSuccess(
        result=[tuple(combo) for combo in cross_product([data1, data2, data3])]
    )
