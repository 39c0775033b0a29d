"""Element model consumed by the order comparator.

The comparator only needs a tag name, the element's own text and its ordered
children. Attributes are carried along for display but never compared. A parent
owns its children outright; elements hold no reference back to their parent.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(eq=False)
class XMLElement:
    """Represents a single XML element in a document tree."""

    tag: str
    text: str = ""
    attributes: Dict[str, str] = field(default_factory=dict)
    children: List["XMLElement"] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate element values."""
        if not self.tag:
            raise ValueError("Element tag cannot be empty")
        if self.text is None:
            self.text = ""

    def add_child(self, child: "XMLElement") -> None:
        """Append a child element."""
        if not isinstance(child, XMLElement):
            raise TypeError("Child must be an XMLElement instance")
        self.children.append(child)

    @property
    def child_names(self) -> List[str]:
        """Tag names of the direct children, in document order."""
        return [child.tag for child in self.children]

    def __repr__(self) -> str:
        return f"XMLElement(tag={self.tag!r}, children={len(self.children)})"
