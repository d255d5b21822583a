"""
COBOL Data Import - harvest data objects and attributes from COBOL copybooks.

This package scans COBOL copybooks, classifies every data description entry
(PICTURE and USAGE) into a COBOL type with size and scale, and maps those
types to target data types through a rule store.

Basic Usage:
    from cobol_dataimport import CopybookReader, RuleStoreBuilder

    store = (
        RuleStoreBuilder()
        .add_rule("data-type", "SINT", "%type%(%size%)")
        .add_rule("common-type", "SINT", "INT(%size%)")
        .build()
    )
    reader = CopybookReader()
    reader.init({
        "scope": "copybook",
        "copybookFile": "CUSTOMER.cpy",
        "namespacePrefix": "MAINFRAME",
        "ruleStore": store,
    })
    data_object = reader.read()
    reader.close()

Command-Line Usage:
    cobol-dataimport --copybook CUSTOMER.cpy -r rules.json -n MAINFRAME
    cobol-dataimport --pds copylib/ -r rules.json -n MAINFRAME -o objects.json
    cobol-dataimport --copybook CUSTOMER.cpy -n MAINFRAME --types
"""

__version__ = "1.0.0"

from cobol_dataimport.exceptions import (
    ConfigError,
    CopybookSyntaxError,
    DataImportError,
    ErrorKind,
    ReadError,
    RuleError,
    SourceError,
)

from cobol_dataimport.config import CaseMode, ImportConfig, ReaderConfig, Scope
from cobol_dataimport.core.classifier import DataCategory, DeclarationMetadata
from cobol_dataimport.main import ImportPipeline, ImportResult, import_copybook, import_pds
from cobol_dataimport.models import (
    ScannedAttribute,
    ScannedAttributeCode,
    ScannedDataObject,
    TypeMetaData,
)
from cobol_dataimport.readers.cobol import CopybookReader
from cobol_dataimport.rules.engine import evaluate_expression, process_rule
from cobol_dataimport.rules.store import RuleStore, RuleStoreBuilder, load_rule_store

__all__ = [
    # Version
    "__version__",
    # Main API
    "import_copybook",
    "import_pds",
    "ImportPipeline",
    "ImportResult",
    "CopybookReader",
    # Configuration
    "ImportConfig",
    "ReaderConfig",
    "Scope",
    "CaseMode",
    # Rules
    "RuleStore",
    "RuleStoreBuilder",
    "load_rule_store",
    "process_rule",
    "evaluate_expression",
    # Data Types
    "DataCategory",
    "DeclarationMetadata",
    "ScannedDataObject",
    "ScannedAttribute",
    "ScannedAttributeCode",
    "TypeMetaData",
    # Exceptions
    "DataImportError",
    "ErrorKind",
    "ConfigError",
    "SourceError",
    "RuleError",
    "CopybookSyntaxError",
    "ReadError",
]
