"""Outcome of an order comparison.

An :class:`OrderedResult` is either ``ORDERED`` or one of the unordered
variants. Each variant fills its own fields and leaves the others at their
defaults. Results are immutable and compare equal when they describe the same
divergence.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class OrderKind(Enum):
    """Discriminator of an OrderedResult."""

    ORDERED = "ordered"
    NAME_DIFFERS = "name_differs"
    TEXT_DIFFERS = "text_differs"
    CHILDREN_DIFFER = "children_differ"
    LINE_DIFFERS = "line_differs"


@dataclass(frozen=True)
class OrderedResult:
    """Result of comparing an original document against its canonical order.

    Use the factory class methods rather than the constructor:

    >>> OrderedResult.ordered().is_ordered
    True
    >>> OrderedResult.name_differs("b", "a").error_message
    'The xml element <a> should be placed before <b>'
    """

    kind: OrderKind = OrderKind.ORDERED

    # NAME_DIFFERS
    expected_name: Optional[str] = None
    actual_name: Optional[str] = None

    # TEXT_DIFFERS
    element_name: Optional[str] = None
    original_text: Optional[str] = None
    new_text: Optional[str] = None

    # CHILDREN_DIFFER
    parent_name: Optional[str] = None
    index: Optional[int] = None
    original_child: Optional[str] = None
    new_child: Optional[str] = None
    original_count: Optional[int] = None
    new_count: Optional[int] = None
    cause: Optional["OrderedResult"] = None
    reordered: bool = False

    # LINE_DIFFERS
    line_number: Optional[int] = None
    expected_line: Optional[str] = None

    @classmethod
    def ordered(cls) -> "OrderedResult":
        return _ORDERED

    @classmethod
    def name_differs(cls, original_name: str, new_name: str) -> "OrderedResult":
        """Element names differ at the same tree position."""
        return cls(
            kind=OrderKind.NAME_DIFFERS,
            expected_name=new_name,
            actual_name=original_name,
        )

    @classmethod
    def text_differs(
        cls, name: str, original_text: str, new_text: str
    ) -> "OrderedResult":
        """Element text differs after whitespace removal; texts are kept raw."""
        return cls(
            kind=OrderKind.TEXT_DIFFERS,
            element_name=name,
            original_text=original_text,
            new_text=new_text,
        )

    @classmethod
    def children_count_differs(
        cls,
        parent_name: str,
        index: int,
        original_child: Optional[str],
        new_child: Optional[str],
        original_count: int,
        new_count: int,
    ) -> "OrderedResult":
        """The two child lists do not hold the same element names."""
        return cls(
            kind=OrderKind.CHILDREN_DIFFER,
            parent_name=parent_name,
            index=index,
            original_child=original_child,
            new_child=new_child,
            original_count=original_count,
            new_count=new_count,
        )

    @classmethod
    def children_order_differs(
        cls,
        parent_name: str,
        index: int,
        original_child: str,
        new_child: str,
        count: int,
        cause: Optional["OrderedResult"] = None,
    ) -> "OrderedResult":
        """Children are the same elements but in a different order.

        ``cause`` is set when the divergence was found inside a group of
        same-named siblings, and holds the result of comparing the pair.
        """
        return cls(
            kind=OrderKind.CHILDREN_DIFFER,
            parent_name=parent_name,
            index=index,
            original_child=original_child,
            new_child=new_child,
            original_count=count,
            new_count=count,
            cause=cause,
            reordered=True,
        )

    @classmethod
    def line_differs(cls, line_number: int, expected_line: str) -> "OrderedResult":
        """Serialized documents differ at ``line_number`` (1-based)."""
        return cls(
            kind=OrderKind.LINE_DIFFERS,
            line_number=line_number,
            expected_line=expected_line,
        )

    @property
    def is_ordered(self) -> bool:
        return self.kind is OrderKind.ORDERED

    @property
    def error_message(self) -> str:
        """Single-line description of the divergence.

        Raises:
            ValueError: If the result is ordered
        """
        if self.kind is OrderKind.NAME_DIFFERS:
            return (
                f"The xml element <{self.expected_name}> should be placed "
                f"before <{self.actual_name}>"
            )
        if self.kind is OrderKind.TEXT_DIFFERS:
            return (
                f"The xml element <{self.element_name}> with text "
                f"'{_one_line(self.new_text)}' should be placed before "
                f"<{self.element_name}> with text '{_one_line(self.original_text)}'"
            )
        if self.kind is OrderKind.CHILDREN_DIFFER:
            return self._children_message()
        if self.kind is OrderKind.LINE_DIFFERS:
            return (
                f"The line {self.line_number} is not considered sorted, "
                f"should be '{_one_line(self.expected_line)}'"
            )
        raise ValueError("An ordered result has no error message")

    def _children_message(self) -> str:
        if not self.reordered:
            if self.original_count != self.new_count:
                return (
                    f"The xml element <{self.parent_name}> with {self.new_count} "
                    f"child elements should be placed before element "
                    f"<{self.parent_name}> with {self.original_count} child elements"
                )
            return (
                f"The xml element <{self.parent_name}> has child <{self.original_child}> "
                f"where <{self.new_child}> is expected (child index {self.index})"
            )
        if self.cause is not None:
            return (
                f"The xml elements <{self.original_child}> in <{self.parent_name}> "
                f"are not in sorted order (child index {self.index}): "
                f"{self.cause.error_message}"
            )
        return (
            f"The xml element <{self.new_child}> should be placed before "
            f"<{self.original_child}> in <{self.parent_name}> "
            f"(child index {self.index})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary representation, omitting unset fields."""
        result: Dict[str, Any] = {
            "kind": self.kind.value,
            "ordered": self.is_ordered,
        }
        for name in (
            "expected_name", "actual_name",
            "element_name", "original_text", "new_text",
            "parent_name", "index", "original_child", "new_child",
            "original_count", "new_count",
            "line_number", "expected_line",
        ):
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        if self.kind is OrderKind.CHILDREN_DIFFER:
            result["reordered"] = self.reordered
        if self.cause is not None:
            result["cause"] = self.cause.to_dict()
        if not self.is_ordered:
            result["message"] = self.error_message
        return result


def _one_line(text: Optional[str]) -> str:
    # Keep multi-line element text from breaking the single-line message
    return " ".join((text or "").split())


_ORDERED = OrderedResult()
