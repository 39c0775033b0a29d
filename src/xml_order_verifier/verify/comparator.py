"""Order-equivalence check between an original tree and its canonical ordering.

The canonical tree is the original document after an external sorter has
reordered sibling elements and reformatted whitespace. The comparator decides
whether the original already is in that order and, when it is not, describes
the first divergence found in document order.

At every element, first failing check wins:

1. tag names must be equal
2. texts must be equal once every whitespace character is removed
3. children must be the same elements in the same effective order

Children correspond by occurrence: the k-th child named ``N`` in the original
is paired with the k-th child named ``N`` in the canonical list. Children with
a name unique among their siblings must keep their relative order. A group of
same-named siblings may sit anywhere relative to the other children, but its
members must pair up with equivalent content, otherwise the group itself is
out of order.
"""

import re
from collections import Counter, defaultdict
from typing import Dict, List, Optional, Sequence

from xml_order_verifier.tree.element import XMLElement
from xml_order_verifier.verify.result import OrderedResult

_WHITESPACE = re.compile(r"\s")


def _without_whitespace(text: Optional[str]) -> str:
    return _WHITESPACE.sub("", text or "")


def _first_difference(original: Sequence[str], new: Sequence[str]) -> int:
    for index, (original_name, new_name) in enumerate(zip(original, new)):
        if original_name != new_name:
            return index
    return min(len(original), len(new))


def _name_at(names: Sequence[str], index: int) -> Optional[str]:
    return names[index] if index < len(names) else None


class TreeComparator:
    """Recursive comparison of two element trees.

    The comparator holds no state between calls and never raises for parsed
    trees; every outcome, including trees that are not a reordering of each
    other, is returned as an :class:`OrderedResult`.
    """

    def compare(self, original: XMLElement, canonical: XMLElement) -> OrderedResult:
        """Check whether ``original`` is already in the order of ``canonical``.

        Args:
            original: Root of the document as it is
            canonical: Root of the same document in canonical order

        Returns:
            ``OrderedResult.ordered()`` or the first divergence found
        """
        if original.tag != canonical.tag:
            return OrderedResult.name_differs(original.tag, canonical.tag)

        if _without_whitespace(original.text) != _without_whitespace(canonical.text):
            return OrderedResult.text_differs(
                original.tag, original.text, canonical.text
            )

        return self._compare_children(original, canonical)

    def _compare_children(
        self, original: XMLElement, canonical: XMLElement
    ) -> OrderedResult:
        parent_name = original.tag
        original_children = original.children
        new_children = canonical.children
        original_names = original.child_names
        new_names = canonical.child_names

        name_counts = Counter(original_names)
        if name_counts != Counter(new_names):
            index = _first_difference(original_names, new_names)
            return OrderedResult.children_count_differs(
                parent_name,
                index,
                _name_at(original_names, index),
                _name_at(new_names, index),
                len(original_children),
                len(new_children),
            )

        new_positions: Dict[str, List[int]] = defaultdict(list)
        for position, name in enumerate(new_names):
            new_positions[name].append(position)

        # Canonical order of the children whose name is unique among siblings
        new_unique_names = [name for name in new_names if name_counts[name] == 1]

        occurrences: Counter = Counter()
        unique_rank = 0
        for index, child in enumerate(original_children):
            name = child.tag
            partner = new_children[new_positions[name][occurrences[name]]]
            occurrences[name] += 1

            if name_counts[name] == 1:
                expected_name = new_unique_names[unique_rank]
                unique_rank += 1
                if expected_name != name:
                    return OrderedResult.children_order_differs(
                        parent_name, index, name, expected_name, len(original_children)
                    )
                nested = self.compare(child, partner)
                if not nested.is_ordered:
                    return nested
            else:
                nested = self.compare(child, partner)
                if not nested.is_ordered:
                    return OrderedResult.children_order_differs(
                        parent_name,
                        index,
                        name,
                        name,
                        len(original_children),
                        cause=nested,
                    )

        return OrderedResult.ordered()


_DEFAULT_COMPARATOR = TreeComparator()


def compare(original: XMLElement, canonical: XMLElement) -> OrderedResult:
    """Compare two element trees with a shared :class:`TreeComparator`."""
    return _DEFAULT_COMPARATOR.compare(original, canonical)
