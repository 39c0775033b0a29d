"""Line-by-line comparison of a serialized document against its sorted text.

This is the strict check: the original file must already be byte-for-byte the
sorted output, apart from the line terminators used and trailing newlines.
"""

from itertools import zip_longest

from xml_order_verifier.verify.result import OrderedResult


class LineComparator:
    """Find the first line where the original text differs from the sorted text."""

    def compare(self, original_xml: str, canonical_xml: str) -> OrderedResult:
        original_lines = original_xml.rstrip("\r\n").splitlines()
        canonical_lines = canonical_xml.rstrip("\r\n").splitlines()

        for line_number, (original_line, canonical_line) in enumerate(
            zip_longest(original_lines, canonical_lines), start=1
        ):
            if original_line != canonical_line:
                return OrderedResult.line_differs(line_number, canonical_line or "")

        return OrderedResult.ordered()
