"""
Configuration - reader parameters and import run settings.

This module handles:
- Scope and CaseMode enumerations
- ReaderConfig: validation of the key/value parameters a reader receives
- ImportConfig: settings of a whole import run, with JSON file support
- Configuration validation and merging
"""

import json
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional

from cobol_dataimport.exceptions import (
    CopybookNotFoundError,
    DirectoryNotFoundError,
    EmptyParameterError,
    InvalidParameterError,
    MissingParameterError,
    NotADirectoryError_,
    NotAFileError,
)
from cobol_dataimport.rules.store import RuleStore

DEFAULT_ENCODING = "latin-1"

# Reader parameter names
PARAM_SCOPE = "scope"
PARAM_COPYBOOK_FILE = "copybookFile"
PARAM_COPYBOOK_DIRECTORY = "copybookDirectory"
PARAM_NAMESPACE_PREFIX = "namespacePrefix"
PARAM_RULE_STORE = "ruleStore"
PARAM_RULE_GROUP = "ruleGroup"
PARAM_CASE = "case"
PARAM_ENCODING = "encoding"
PARAM_SORT_MEMBERS = "sortMembers"


class Scope(Enum):
    """What a COBOL reader scans."""

    COPYBOOK = "copybook"  # A single copybook file
    PDS = "pds"            # Every regular file of a directory


class CaseMode(Enum):
    """Case conversion applied to textual output fields."""

    MIXED = "mixed"
    UPPER = "upper"
    LOWER = "lower"

    def convert(self, text: Optional[str]) -> Optional[str]:
        """Apply the mode to ``text``; None passes through."""
        if text is None or self is CaseMode.MIXED:
            return text
        return text.upper() if self is CaseMode.UPPER else text.lower()


def _parse_enum(enum_cls, value: Any, parameter: str):
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        raise InvalidParameterError(parameter) from None


def _parse_bool(value: Any, parameter: str) -> bool:
    if value is None or isinstance(value, bool):
        return bool(value)
    text = str(value).strip().lower()
    if text in ("true", "false"):
        return text == "true"
    raise InvalidParameterError(parameter)


@dataclass
class ReaderConfig:
    """
    Validated reader parameters.

    Attributes:
        scope: COPYBOOK or PDS
        namespace_prefix: Prefix used to build data object namespaces
        rule_store: Rules for namespace, data-type and common-type mapping
        copybook_file: The copybook (COPYBOOK scope)
        copybook_directory: The PDS directory (PDS scope)
        rule_group: Informational rule group name
        case_mode: Case conversion of output fields
        encoding: Copybook file encoding
        sort_members: Read PDS members in name order
    """

    scope: Scope
    namespace_prefix: str
    rule_store: RuleStore
    copybook_file: Optional[Path] = None
    copybook_directory: Optional[Path] = None
    rule_group: Optional[str] = None
    case_mode: CaseMode = CaseMode.MIXED
    encoding: str = DEFAULT_ENCODING
    sort_members: bool = False

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "ReaderConfig":
        """
        Validate reader parameters.

        Checks run in a fixed order (scope and its source, namespace prefix,
        rule store, case) and stop at the first problem.

        Args:
            params: Parameter name -> value

        Returns:
            The validated configuration

        Raises:
            ConfigError: On missing, empty or invalid parameters
            SourceError: If the copybook file or directory is unusable
        """
        if params.get(PARAM_SCOPE) is None:
            raise MissingParameterError(PARAM_SCOPE)
        scope = _parse_enum(Scope, params[PARAM_SCOPE], PARAM_SCOPE)

        copybook_file = None
        copybook_directory = None
        if scope is Scope.COPYBOOK:
            copybook_file = _existing_file(params.get(PARAM_COPYBOOK_FILE))
        else:
            copybook_directory = _existing_directory(params.get(PARAM_COPYBOOK_DIRECTORY))

        prefix = params.get(PARAM_NAMESPACE_PREFIX)
        if prefix is None:
            raise MissingParameterError(PARAM_NAMESPACE_PREFIX)
        prefix = str(prefix).strip()
        if not prefix:
            raise EmptyParameterError(PARAM_NAMESPACE_PREFIX)

        rule_store = params.get(PARAM_RULE_STORE)
        if rule_store is None:
            raise MissingParameterError(PARAM_RULE_STORE)
        if not isinstance(rule_store, RuleStore):
            raise InvalidParameterError(PARAM_RULE_STORE)

        case_mode = CaseMode.MIXED
        if params.get(PARAM_CASE) is not None:
            case_mode = _parse_enum(CaseMode, params[PARAM_CASE], PARAM_CASE)

        return cls(
            scope=scope,
            namespace_prefix=prefix,
            rule_store=rule_store,
            copybook_file=copybook_file,
            copybook_directory=copybook_directory,
            rule_group=params.get(PARAM_RULE_GROUP),
            case_mode=case_mode,
            encoding=params.get(PARAM_ENCODING) or DEFAULT_ENCODING,
            sort_members=_parse_bool(params.get(PARAM_SORT_MEMBERS, False), PARAM_SORT_MEMBERS),
        )

    def to_params(self) -> dict[str, Any]:
        """Inverse of from_params()."""
        params: dict[str, Any] = {
            PARAM_SCOPE: self.scope.value,
            PARAM_NAMESPACE_PREFIX: self.namespace_prefix,
            PARAM_RULE_STORE: self.rule_store,
            PARAM_CASE: self.case_mode.value,
            PARAM_ENCODING: self.encoding,
            PARAM_SORT_MEMBERS: self.sort_members,
        }
        if self.copybook_file is not None:
            params[PARAM_COPYBOOK_FILE] = str(self.copybook_file)
        if self.copybook_directory is not None:
            params[PARAM_COPYBOOK_DIRECTORY] = str(self.copybook_directory)
        if self.rule_group is not None:
            params[PARAM_RULE_GROUP] = self.rule_group
        return params


def _existing_file(value: Any) -> Path:
    if value is None:
        raise MissingParameterError(PARAM_COPYBOOK_FILE)
    path = Path(value)
    if not path.exists():
        raise CopybookNotFoundError(str(value))
    if not path.is_file():
        raise NotAFileError(str(value))
    return path


def _existing_directory(value: Any) -> Path:
    if value is None:
        raise MissingParameterError(PARAM_COPYBOOK_DIRECTORY)
    path = Path(value)
    if not path.exists():
        raise DirectoryNotFoundError(str(value))
    if not path.is_dir():
        raise NotADirectoryError_(str(value))
    return path


@dataclass
class ImportConfig:
    """
    Settings of one import run.

    Attributes:
        copybooks: Copybook files, each imported with COPYBOOK scope
        pds_directories: Directories, each imported with PDS scope
        rules_file: JSON or CSV rule file
        rule_group: Rule group (filters CSV rule files)
        namespace_prefix: Namespace prefix handed to every reader
        case: Case mode name (mixed, upper, lower)
        encoding: Copybook encoding (default: latin-1)
        sort_members: Read PDS members in name order
        type_mode: Collect type metadata instead of applying rules
        output_file: Where to write the JSON (or CSV type metadata) output
        status_file: Where to write reader status lines
        log_level: Logging level
        verbose: Enable verbose output
        quiet: Suppress normal output
    """

    copybooks: list[Path] = field(default_factory=list)
    pds_directories: list[Path] = field(default_factory=list)
    rules_file: Optional[Path] = None
    rule_group: Optional[str] = None
    namespace_prefix: str = ""
    case: str = CaseMode.MIXED.value
    encoding: str = DEFAULT_ENCODING
    sort_members: bool = False
    type_mode: bool = False
    output_file: Optional[Path] = None
    status_file: Optional[Path] = None
    log_level: str = "INFO"
    verbose: bool = False
    quiet: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert config to a JSON-friendly dictionary."""
        data = {}
        for key, value in asdict(self).items():
            if isinstance(value, Path):
                data[key] = str(value)
            elif isinstance(value, list):
                data[key] = [str(p) for p in value]
            else:
                data[key] = value
        return data

    def save_to_file(self, path: Path) -> None:
        """Save configuration to JSON file."""
        path.write_text(json.dumps(self.to_dict(), indent=2))

    @classmethod
    def load_from_file(cls, path: Path) -> "ImportConfig":
        """Load configuration from JSON file."""
        data = json.loads(path.read_text())
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ImportConfig":
        """Create config from dictionary; unknown keys are ignored."""
        data = dict(data)
        for key in ("copybooks", "pds_directories"):
            if key in data:
                data[key] = [Path(p) for p in data[key]]
        for key in ("rules_file", "output_file", "status_file"):
            if data.get(key):
                data[key] = Path(data[key])

        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        return cls(**{k: v for k, v in data.items() if k in known_fields})

    def validate(self) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.copybooks and not self.pds_directories:
            errors.append("No copybook or PDS directory given")

        if self.type_mode and self.pds_directories:
            errors.append("Type mode is only supported for copybook scope")

        if self.rules_file is not None and not self.rules_file.is_file():
            errors.append(f"Rules file does not exist: {self.rules_file}")

        if not self.namespace_prefix.strip():
            errors.append("Namespace prefix is empty")

        if self.case.lower() not in {mode.value for mode in CaseMode}:
            errors.append(f"Invalid case mode: {self.case}")

        valid_log_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level.upper() not in valid_log_levels:
            errors.append(f"Invalid log level: {self.log_level}")

        return errors

    def is_valid(self) -> bool:
        return len(self.validate()) == 0


def create_default_config() -> ImportConfig:
    """Create a configuration with default values."""
    return ImportConfig()


def merge_configs(base: ImportConfig, override: ImportConfig) -> ImportConfig:
    """
    Merge two configurations, with override taking precedence.

    Only values of ``override`` that differ from the defaults replace those
    of ``base``.
    """
    base_dict = base.to_dict()
    override_dict = override.to_dict()
    default = create_default_config().to_dict()

    merged = {}
    for key in base_dict:
        if override_dict.get(key) != default.get(key):
            merged[key] = override_dict[key]
        else:
            merged[key] = base_dict[key]

    return ImportConfig.from_dict(merged)
