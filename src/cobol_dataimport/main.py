"""
Main entry point for the COBOL data import.

This module runs copybook readers over every configured source and provides
a programmatic API for the import.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, TextIO

from cobol_dataimport.config import (
    PARAM_CASE,
    PARAM_COPYBOOK_DIRECTORY,
    PARAM_COPYBOOK_FILE,
    PARAM_ENCODING,
    PARAM_NAMESPACE_PREFIX,
    PARAM_RULE_GROUP,
    PARAM_RULE_STORE,
    PARAM_SCOPE,
    PARAM_SORT_MEMBERS,
    ImportConfig,
    Scope,
    create_default_config,
)
from cobol_dataimport.exceptions import DataImportError
from cobol_dataimport.logging_config import get_logger
from cobol_dataimport.models import ScannedDataObject, TypeMetaData
from cobol_dataimport.readers.cobol import CopybookReader
from cobol_dataimport.rules.store import RuleStore, load_rule_store

logger = get_logger("main")

# (source path, data object)
OnDataObjectCallback = Callable[[Path, ScannedDataObject], None]


@dataclass
class ImportResult:
    """Result of running the import over all configured sources."""

    success: bool
    data_objects: List[ScannedDataObject] = field(default_factory=list)
    type_metadata: Optional[TypeMetaData] = None
    errors: List[str] = field(default_factory=list)
    status_lines: List[str] = field(default_factory=list)
    processing_time: float = 0.0

    @property
    def attribute_count(self) -> int:
        return sum(len(obj.attributes) for obj in self.data_objects)


class ImportPipeline:
    """
    Imports every configured copybook and PDS directory.

    A failing source is recorded in the result and the pipeline moves on to
    the next one.

    Usage:
        pipeline = ImportPipeline(config)
        result = pipeline.run()
    """

    def __init__(
        self,
        config: Optional[ImportConfig] = None,
        rule_store: Optional[RuleStore] = None,
        status_writer: Optional[TextIO] = None,
    ):
        """
        Initialize the pipeline.

        Args:
            config: Run configuration (uses defaults if not provided)
            rule_store: Rules to use instead of loading config.rules_file
            status_writer: Stream receiving reader status lines
        """
        self.config = config or create_default_config()
        self.rule_store = rule_store
        self.status_writer = status_writer

    def sources(self) -> List[Dict[str, Any]]:
        """Reader parameters for every configured source, copybooks first."""
        common = {
            PARAM_NAMESPACE_PREFIX: self.config.namespace_prefix,
            PARAM_RULE_STORE: self.rule_store,
            PARAM_CASE: self.config.case,
            PARAM_ENCODING: self.config.encoding,
        }
        if self.config.rule_group:
            common[PARAM_RULE_GROUP] = self.config.rule_group

        params = []
        for copybook in self.config.copybooks:
            params.append({**common, PARAM_SCOPE: Scope.COPYBOOK.value, PARAM_COPYBOOK_FILE: str(copybook)})
        for directory in self.config.pds_directories:
            params.append({
                **common,
                PARAM_SCOPE: Scope.PDS.value,
                PARAM_COPYBOOK_DIRECTORY: str(directory),
                PARAM_SORT_MEMBERS: self.config.sort_members,
            })
        return params

    def run(self, on_data_object: Optional[OnDataObjectCallback] = None) -> ImportResult:
        """
        Run the import.

        Args:
            on_data_object: Callback after each data object is read

        Returns:
            ImportResult with all data objects and errors
        """
        start_time = time.time()
        result = ImportResult(success=True)

        config_errors = self.config.validate()
        if config_errors:
            result.success = False
            result.errors.extend(config_errors)
            return result

        if self.rule_store is None:
            if self.config.rules_file is not None:
                try:
                    self.rule_store = load_rule_store(self.config.rules_file, self.config.rule_group)
                except DataImportError as e:
                    result.success = False
                    result.errors.append(str(e))
                    return result
            elif self.config.type_mode:
                # Type mode never consults rules
                self.rule_store = RuleStore()
            else:
                result.success = False
                result.errors.append("A rules file is required")
                return result

        if self.config.type_mode:
            result.type_metadata = TypeMetaData()

        for params in self.sources():
            source = params.get(PARAM_COPYBOOK_FILE) or params.get(PARAM_COPYBOOK_DIRECTORY)
            reader = CopybookReader()
            reader.set_log_writer(self.status_writer)
            if self.config.type_mode:
                reader.enable_type_mode()
            try:
                with reader:
                    reader.init(params)
                    while True:
                        data_object = reader.read()
                        if data_object is None:
                            break
                        result.data_objects.append(data_object)
                        if on_data_object:
                            on_data_object(Path(data_object.source), data_object)
                if self.config.type_mode:
                    result.type_metadata.rows.extend(reader.get_type_metadata().rows)
            except DataImportError as e:
                logger.error("Import of %s failed: %s", source, e)
                result.success = False
                result.errors.append(f"Error importing {source}: {e}")
            result.status_lines.extend(reader.status.lines)

        result.processing_time = time.time() - start_time
        return result


def import_copybook(
    copybook: Path,
    rule_store: RuleStore,
    namespace_prefix: str,
    **kwargs,
) -> ImportResult:
    """
    Convenience function to import a single copybook.

    Args:
        copybook: Copybook file
        rule_store: Mapping rules
        namespace_prefix: Namespace prefix
        **kwargs: Additional ImportConfig options

    Returns:
        ImportResult with details
    """
    config = ImportConfig(copybooks=[copybook], namespace_prefix=namespace_prefix, **kwargs)
    return ImportPipeline(config, rule_store=rule_store).run()


def import_pds(
    directory: Path,
    rule_store: RuleStore,
    namespace_prefix: str,
    **kwargs,
) -> ImportResult:
    """
    Convenience function to import every copybook of a directory.

    Args:
        directory: PDS directory
        rule_store: Mapping rules
        namespace_prefix: Namespace prefix
        **kwargs: Additional ImportConfig options

    Returns:
        ImportResult with details
    """
    config = ImportConfig(pds_directories=[directory], namespace_prefix=namespace_prefix, **kwargs)
    return ImportPipeline(config, rule_store=rule_store).run()
