"""Verification API with progressive disclosure.

Level 1 is the module functions :func:`verify_trees`, :func:`verify_strings`
and :func:`verify_files`. Level 2 is :class:`OrderVerifier`, which keeps one
configuration and correlation ID across many documents.

The canonical document is always produced elsewhere (by whatever sorts the
files); this layer only reads both versions, runs the comparison selected by
``VerifyConfig.fail_on`` and applies ``VerifyConfig.fail_type``.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from xml_order_verifier.shared import (
    UnsortedDocumentError,
    VerifyConfig,
    VerifyFailOn,
    VerifyFailType,
    XMLInputError,
    get_logger,
    new_correlation_id,
)
from xml_order_verifier.tree import XMLElement, parse_xml_string
from xml_order_verifier.verify import LineComparator, OrderedResult, TreeComparator

PathType = Union[str, Path]

MS_PER_SECOND = 1000
TEXT_FILE_NOT_SORTED = "The file {} is not sorted"


@dataclass(frozen=True)
class VerificationReport:
    """Outcome of verifying one document."""

    label: str
    result: OrderedResult
    fail_on: VerifyFailOn
    processing_time_ms: float = 0.0
    correlation_id: Optional[str] = None

    @property
    def is_ordered(self) -> bool:
        return self.result.is_ordered

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file": self.label,
            "ordered": self.is_ordered,
            "fail_on": self.fail_on.name,
            "processing_time_ms": self.processing_time_ms,
            "correlation_id": self.correlation_id,
            "result": self.result.to_dict(),
        }


class OrderVerifier:
    """Configured verifier that applies the divergence policy.

    Examples:
        >>> verifier = OrderVerifier(VerifyConfig.lenient())
        >>> report = verifier.verify_strings("<r><b/><a/></r>", "<r><a/><b/></r>")
        >>> report.is_ordered
        False
    """

    def __init__(self, config: Optional[VerifyConfig] = None) -> None:
        self.config = config or VerifyConfig()
        self.correlation_id = self.config.correlation_id or new_correlation_id()
        self.logger = get_logger(__name__, self.correlation_id, "order_verifier")
        self._tree_comparator = TreeComparator()
        self._line_comparator = LineComparator()
        self._documents_checked = 0
        self._documents_unsorted = 0

    def verify_trees(
        self,
        original: XMLElement,
        canonical: XMLElement,
        label: str = "<tree>",
    ) -> VerificationReport:
        """Verify already parsed trees.

        Trees carry no serialized text, so this always compares elements,
        whatever ``fail_on`` says.
        """
        start_time = time.time()
        self.logger.info(f"Verifying {label}", extra={"fail_on": VerifyFailOn.XMLELEMENTS.name})
        result = self._tree_comparator.compare(original, canonical)
        return self._finish(label, result, VerifyFailOn.XMLELEMENTS, start_time)

    def verify_strings(
        self,
        original_xml: Union[str, bytes],
        canonical_xml: Union[str, bytes],
        label: str = "<string>",
    ) -> VerificationReport:
        """Verify two documents held in memory.

        Raises:
            XMLInputError: If a document is not well-formed (element mode) or
                not decodable as UTF-8 (string mode)
            UnsortedDocumentError: If unsorted and ``fail_type`` is STOP
        """
        start_time = time.time()
        fail_on = self.config.fail_on
        self.logger.info(f"Verifying {label}", extra={"fail_on": fail_on.name})

        if fail_on is VerifyFailOn.STRINGDIFFERENCE:
            result = self._line_comparator.compare(
                _as_text(original_xml, label), _as_text(canonical_xml, label)
            )
        else:
            strip = self.config.strip_namespaces
            original = parse_xml_string(original_xml, strip, label=label)
            canonical = parse_xml_string(canonical_xml, strip, label=f"{label} (sorted)")
            result = self._tree_comparator.compare(original, canonical)

        return self._finish(label, result, fail_on, start_time)

    def verify_files(
        self, original_path: PathType, canonical_path: PathType
    ) -> VerificationReport:
        """Verify a file against the sorted version of it written elsewhere."""
        original_path = Path(original_path)
        return self.verify_strings(
            _read_bytes(original_path),
            _read_bytes(Path(canonical_path)),
            label=str(original_path.absolute()),
        )

    def _finish(
        self,
        label: str,
        result: OrderedResult,
        fail_on: VerifyFailOn,
        start_time: float,
    ) -> VerificationReport:
        processing_time = (time.time() - start_time) * MS_PER_SECOND
        self._documents_checked += 1
        report = VerificationReport(
            label=label,
            result=result,
            fail_on=fail_on,
            processing_time_ms=processing_time,
            correlation_id=self.correlation_id,
        )

        if result.is_ordered:
            self.logger.info(
                f"The file {label} is sorted",
                extra={"processing_time_ms": processing_time},
            )
            return report

        self._documents_unsorted += 1
        self._apply_policy(report)
        return report

    def _apply_policy(self, report: VerificationReport) -> None:
        extra = {"kind": report.result.kind.value, "file": report.label}
        not_sorted = TEXT_FILE_NOT_SORTED.format(report.label)

        if self.config.fail_type is VerifyFailType.STOP:
            self.logger.error(report.result.error_message, extra=extra)
            self.logger.error(not_sorted, extra=extra)
            raise UnsortedDocumentError(report.label, report.result)

        self.logger.warning(report.result.error_message, extra=extra)
        self.logger.warning(not_sorted, extra=extra)

    @property
    def statistics(self) -> Dict[str, Any]:
        """Counts of documents checked by this verifier."""
        return {
            "documents_checked": self._documents_checked,
            "documents_unsorted": self._documents_unsorted,
            "correlation_id": self.correlation_id,
        }


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as e:
        raise XMLInputError(f"Could not read {path}: {e}", source=str(path)) from e


def _as_text(data: Union[str, bytes], label: str) -> str:
    if isinstance(data, str):
        return data
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise XMLInputError(f"Could not decode {label} as UTF-8: {e}", source=label) from e


def verify_trees(
    original: XMLElement,
    canonical: XMLElement,
    config: Optional[VerifyConfig] = None,
) -> VerificationReport:
    """Verify two parsed trees.

    Examples:
        >>> from xml_order_verifier.tree import XMLElement
        >>> verify_trees(XMLElement("a"), XMLElement("a")).is_ordered
        True
    """
    return OrderVerifier(config).verify_trees(original, canonical)


def verify_strings(
    original_xml: Union[str, bytes],
    canonical_xml: Union[str, bytes],
    config: Optional[VerifyConfig] = None,
) -> VerificationReport:
    """Verify two in-memory documents."""
    return OrderVerifier(config).verify_strings(original_xml, canonical_xml)


def verify_files(
    original_path: PathType,
    canonical_path: PathType,
    config: Optional[VerifyConfig] = None,
) -> VerificationReport:
    """Verify a file against its sorted counterpart."""
    return OrderVerifier(config).verify_files(original_path, canonical_path)
