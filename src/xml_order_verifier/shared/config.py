"""Configuration for XML order verification.

Configuration objects are frozen dataclasses: a run's settings cannot change
while documents are being checked, and the same instance can be shared by
worker processes.
"""

import json
from dataclasses import dataclass, fields, replace
from enum import Enum, auto
from typing import Any, Dict, Optional

from xml_order_verifier.shared.exceptions import ConfigValidationError

_VALID_LOGGING_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class VerifyFailType(Enum):
    """What to do when a document is not in sorted order."""

    WARN = auto()   # Log the divergence and carry on
    STOP = auto()   # Log the divergence and raise UnsortedDocumentError


class VerifyFailOn(Enum):
    """How the original document is checked against the canonical one."""

    XMLELEMENTS = auto()        # Element-by-element tree comparison
    STRINGDIFFERENCE = auto()   # Line-by-line comparison of the serialized text


@dataclass(frozen=True)
class VerifyConfig:
    """Settings for one verification run."""

    fail_type: VerifyFailType = VerifyFailType.WARN
    fail_on: VerifyFailOn = VerifyFailOn.XMLELEMENTS

    # Tree building
    strip_namespaces: bool = True

    # Logging
    logging_level: str = "INFO"
    correlation_id: Optional[str] = None

    # Metadata
    name: Optional[str] = None
    description: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the configuration."""
        if not isinstance(self.fail_type, VerifyFailType):
            raise ConfigValidationError(
                f"fail_type must be a VerifyFailType, got {self.fail_type!r}",
                field_name="fail_type",
                suggestions=[member.name.lower() for member in VerifyFailType],
            )
        if not isinstance(self.fail_on, VerifyFailOn):
            raise ConfigValidationError(
                f"fail_on must be a VerifyFailOn, got {self.fail_on!r}",
                field_name="fail_on",
                suggestions=[member.name.lower() for member in VerifyFailOn],
            )
        if self.logging_level not in _VALID_LOGGING_LEVELS:
            raise ConfigValidationError(
                f"logging_level must be one of {_VALID_LOGGING_LEVELS}",
                field_name="logging_level",
                suggestions=list(_VALID_LOGGING_LEVELS),
            )

    @classmethod
    def strict(cls) -> "VerifyConfig":
        """Stop on the first unsorted document."""
        return cls(
            fail_type=VerifyFailType.STOP,
            name="strict",
            description="Raise an error when a document is not sorted",
        )

    @classmethod
    def lenient(cls) -> "VerifyConfig":
        """Only warn about unsorted documents."""
        return cls(
            fail_type=VerifyFailType.WARN,
            name="lenient",
            description="Log a warning when a document is not sorted",
        )

    def override(self, **kwargs: Any) -> "VerifyConfig":
        """Create a new configuration with specific overrides.

        Enum fields accept either the member or its (case-insensitive) name.

        Example:
            >>> config = VerifyConfig().override(fail_type="stop")
            >>> config.fail_type
            <VerifyFailType.STOP: 2>
        """
        known = {f.name for f in fields(self)}
        unknown = sorted(set(kwargs) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration fields: {', '.join(unknown)}",
                field_name=unknown[0],
                suggestions=sorted(known),
            )
        return replace(self, **_coerce_enums(kwargs))

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format, enums by name."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = value.name if isinstance(value, Enum) else value
        return result

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VerifyConfig":
        """Create configuration from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**_coerce_enums({k: v for k, v in data.items() if k in known}))

    @classmethod
    def from_json(cls, json_str: str) -> "VerifyConfig":
        return cls.from_dict(load_config_json(json_str))


def load_config_json(json_str: str) -> Dict[str, Any]:
    """Parse a configuration document that must hold a JSON object."""
    try:
        data = json.loads(json_str)
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"Invalid configuration JSON: {e}") from e
    if not isinstance(data, dict):
        raise ConfigValidationError("Configuration JSON must be an object")
    return data


def _coerce_enums(values: Dict[str, Any]) -> Dict[str, Any]:
    """Map enum names given as strings onto their enum members."""
    enum_fields = {"fail_type": VerifyFailType, "fail_on": VerifyFailOn}
    coerced = dict(values)
    for field_name, enum_type in enum_fields.items():
        value = coerced.get(field_name)
        if isinstance(value, str):
            try:
                coerced[field_name] = enum_type[value.upper()]
            except KeyError as e:
                raise ConfigValidationError(
                    f"Invalid {field_name}: {value!r}",
                    field_name=field_name,
                    suggestions=[member.name.lower() for member in enum_type],
                ) from e
    return coerced
