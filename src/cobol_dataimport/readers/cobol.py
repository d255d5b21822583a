"""
Copybook Reader - builds data objects from COBOL copybooks.

Each copybook becomes one ScannedDataObject named after the file. Every
elementary item with a data name and a recognizable type becomes an
attribute; level-88 condition names following an item become its codes.

Types are mapped through the rule store:
- data-type rule for the COBOL type name, falling back to the declared
  PICTURE/USAGE text
- common-type rule for the COBOL type name, falling back to ""
- namespace rule "name", falling back to the namespace prefix

Placeholders available to rules: %type%, %size%, %scale%, %usage% for type
rules and %prefix%, %schema% (the directory holding the copybook) for the
namespace rule.
"""

from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, TextIO, Union

from cobol_dataimport.config import CaseMode, ReaderConfig, Scope
from cobol_dataimport.core.classifier import DeclarationMetadata
from cobol_dataimport.core.declarations import iter_declarations
from cobol_dataimport.exceptions import (
    CopybookSyntaxError,
    ReadError,
    SourceError,
    TypeModeError,
)
from cobol_dataimport.logging_config import get_logger
from cobol_dataimport.models import ScannedAttribute, ScannedAttributeCode, ScannedDataObject
from cobol_dataimport.readers.base import DataObjectReader
from cobol_dataimport.rules.engine import resolve_rule
from cobol_dataimport.rules.store import COMMON_TYPE, DATA_TYPE, NAMESPACE, NAMESPACE_RULE

logger = get_logger("readers.cobol")


class CopybookScope:
    """A single copybook, handed out once."""

    def __init__(self, path: Path):
        self.path = path
        self._consumed = False

    def next_member(self) -> Optional[Path]:
        if self._consumed:
            return None
        self._consumed = True
        return self.path

    def __len__(self) -> int:
        return 1


class PdsScope:
    """Every regular file of a directory, listed once at init time."""

    def __init__(self, directory: Path, sort_members: bool = False):
        self.directory = directory
        members = [path for path in directory.iterdir() if path.is_file()]
        if sort_members:
            members.sort(key=lambda path: path.name)
        self.members = members
        self._index = 0

    def next_member(self) -> Optional[Path]:
        if self._index >= len(self.members):
            return None
        member = self.members[self._index]
        self._index += 1
        return member

    def __len__(self) -> int:
        return len(self.members)


MemberScope = Union[CopybookScope, PdsScope]


def create_scope(config: ReaderConfig) -> MemberScope:
    """Build the member iterator for a validated configuration."""
    if config.scope is Scope.COPYBOOK:
        return CopybookScope(config.copybook_file)
    return PdsScope(config.copybook_directory, config.sort_members)


class CopybookReader(DataObjectReader):
    """
    Reads one copybook (COPYBOOK scope) or every member of a directory
    (PDS scope).

    Usage:
        reader = CopybookReader()
        reader.init({
            "scope": "copybook",
            "copybookFile": "CUSTOMER.cpy",
            "namespacePrefix": "MAINFRAME",
            "ruleStore": store,
        })
        data_object = reader.read()
        reader.close()
    """

    def __init__(self) -> None:
        super().__init__()
        self.config: Optional[ReaderConfig] = None
        self._scope: Optional[MemberScope] = None
        self._handle: Optional[TextIO] = None

    @property
    def case_mode(self) -> CaseMode:
        return self.config.case_mode if self.config else CaseMode.MIXED

    def _configure(self, params: Mapping[str, Any]) -> ReaderConfig:
        config = ReaderConfig.from_params(params)
        self._scope = create_scope(config)
        return config

    def _check_type_mode(self, config: ReaderConfig) -> None:
        if config.scope is not Scope.COPYBOOK:
            raise TypeModeError("Type mode is only supported for copybook scope")

    def _read_next(self) -> Optional[ScannedDataObject]:
        path = self._scope.next_member()
        if path is None:
            return None
        return self._process_copybook(path)

    def _release(self) -> None:
        handle, self._handle = self._handle, None
        if handle is None:
            return
        try:
            handle.close()
        except OSError as exc:
            logger.error("Error closing %s: %s", getattr(handle, "name", handle), exc)

    def _process_copybook(self, path: Path) -> ScannedDataObject:
        convert = self.case_mode.convert
        namespace = self._resolve_namespace(path)

        self.status.banner(f"Importing {path.name}")
        logger.info("Importing %s", path)

        try:
            self._handle = open(path, encoding=self.config.encoding)
        except OSError as exc:
            raise SourceError(f"Unable to open copybook {path}: {exc}") from exc

        try:
            attributes = self._create_attributes(self._handle, path.name)
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError(f"Error reading copybook {path}: {exc}") from exc
        finally:
            self._release()

        logger.debug("%s: %d attributes", path.name, len(attributes))
        return ScannedDataObject(
            name=convert(path.name),
            namespace=convert(namespace),
            attributes=attributes,
            source=str(path),
        )

    def _resolve_namespace(self, path: Path) -> str:
        prefix = self.config.namespace_prefix
        if self.type_mode:
            return prefix
        values = {"prefix": prefix, "schema": path.parent.name}
        return resolve_rule(self.config.rule_store, NAMESPACE, NAMESPACE_RULE, values, default=prefix)

    def _create_attributes(self, lines: Iterable[str], copybook: str) -> List[ScannedAttribute]:
        convert = self.case_mode.convert
        attributes: List[ScannedAttribute] = []
        last_attribute: Optional[ScannedAttribute] = None

        for declaration in iter_declarations(lines):
            if not declaration.text:
                continue
            try:
                metadata = DeclarationMetadata.from_declaration(declaration.text)
            except CopybookSyntaxError as exc:
                raise CopybookSyntaxError(exc.message, copybook, declaration.line_number) from exc

            if metadata.is_condition_name and metadata.value and metadata.data_name:
                if last_attribute is None:
                    raise CopybookSyntaxError(
                        f"condition name {metadata.data_name} has no preceding data item",
                        copybook,
                        declaration.line_number,
                    )
                last_attribute.add_code(
                    ScannedAttributeCode(convert(metadata.value), convert(metadata.data_name))
                )
                continue

            if not metadata.data_name or not metadata.type_name:
                continue

            last_attribute = self._create_attribute(metadata, len(attributes) + 1)
            attributes.append(last_attribute)

        return attributes

    def _create_attribute(self, metadata: DeclarationMetadata, seq_no: int) -> ScannedAttribute:
        convert = self.case_mode.convert
        size = str(metadata.size)
        scale = str(metadata.decimal_digits)

        if self.type_mode:
            self._type_metadata.add(
                attribute=metadata.data_name,
                declaration=metadata.declared_type,
                type=metadata.type_name,
                size=size,
                scale=scale,
                usage=metadata.usage,
            )
            return ScannedAttribute(name=convert(metadata.data_name), seq_no=seq_no)

        values = {
            "type": metadata.type_name,
            "size": size,
            "scale": scale,
            "usage": metadata.usage,
        }
        store = self.config.rule_store
        data_type = resolve_rule(
            store, DATA_TYPE, metadata.type_name, values, default=metadata.declared_type
        )
        common_type = resolve_rule(store, COMMON_TYPE, metadata.type_name, values, default="")

        return ScannedAttribute(
            name=convert(metadata.data_name),
            seq_no=seq_no,
            data_type=convert(data_type),
            common_type=convert(common_type),
            default_value=convert(metadata.value),
        )
