"""Order verification of XML trees.

Key Components:
    TreeComparator: Recursive order-equivalence check of two element trees
    LineComparator: First differing line between two serialized documents
    OrderedResult: Immutable outcome of either comparison
"""

from .comparator import TreeComparator, compare
from .lines import LineComparator
from .result import OrderedResult, OrderKind

__all__ = [
    "LineComparator",
    "OrderKind",
    "OrderedResult",
    "TreeComparator",
    "compare",
]
