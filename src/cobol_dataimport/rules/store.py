"""
Rule Store - mapping rules keyed by category and name.

A rule store is assembled once per import run (from a JSON or CSV rule file,
or programmatically through RuleStoreBuilder) and is read-only afterwards, so
one instance can be handed to any number of readers.

Categories used by the COBOL reader:
- data-type:   COBOL type name -> destination data type template
- common-type: COBOL type name -> common (portable) type template
- namespace:   "name" -> namespace template

Rule file formats:

JSON::

    {
      "group": "COBOL",
      "rules": {
        "data-type": {"UINT": "%type%(%size%)"},
        "common-type": {"UINT": "INT(%size%)"}
      }
    }

CSV (header required)::

    group,category,name,rule
    COBOL,data-type,UINT,%type%(%size%)
"""

import csv
import json
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, Optional, Tuple

from cobol_dataimport.exceptions import ConfigError, SourceError
from cobol_dataimport.logging_config import get_logger

logger = get_logger("rules")

DATA_TYPE = "data-type"
COMMON_TYPE = "common-type"
NAMESPACE = "namespace"
NAMESPACE_RULE = "name"

CSV_FIELDS = ("group", "category", "name", "rule")


class RuleMap(Mapping):
    """Read-only name -> rule mapping for one category."""

    def __init__(self, category: str, rules: Optional[Mapping] = None):
        self.category = category
        self._rules: Dict[str, str] = dict(rules or {})

    def get_rule(self, name: str) -> Optional[str]:
        """Return the rule for ``name`` or None."""
        return self._rules.get(name)

    def __getitem__(self, name: str) -> str:
        return self._rules[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleMap({self.category!r}, {len(self._rules)} rules)"


class RuleStore:
    """
    Immutable category -> name -> rule store.

    Usage:
        store = RuleStore({"data-type": {"UINT": "%type%(%size%)"}})
        store.get_rule("data-type", "UINT")    # "%type%(%size%)"
        store.get_rule("data-type", "FLOAT4")  # None
    """

    def __init__(
        self,
        rules: Optional[Mapping] = None,
        group: Optional[str] = None,
    ):
        self.group = group
        categories = {
            category: RuleMap(category, entries)
            for category, entries in (rules or {}).items()
        }
        self._categories = MappingProxyType(categories)

    def get_rule(self, category: str, name: str) -> Optional[str]:
        """
        Look up a rule.

        Args:
            category: Rule category (data-type, common-type, namespace)
            name: Rule name within the category

        Returns:
            The rule template, or None if the category or name is unknown
        """
        rule_map = self._categories.get(category)
        if rule_map is None:
            return None
        return rule_map.get_rule(name)

    def get_rules_by_category(self, category: str) -> Optional[RuleMap]:
        return self._categories.get(category)

    @property
    def categories(self) -> Tuple[str, ...]:
        return tuple(self._categories)

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {category: dict(rule_map) for category, rule_map in self._categories.items()}

    def __len__(self) -> int:
        return sum(len(rule_map) for rule_map in self._categories.values())

    def __repr__(self) -> str:
        return f"RuleStore(group={self.group!r}, {len(self)} rules)"


class RuleStoreBuilder:
    """
    Collects rules one at a time and produces a RuleStore.

    Usage:
        builder = RuleStoreBuilder()
        builder.add_rule("data-type", "UINT", "%type%(%size%)")
        store = builder.build()
    """

    def __init__(self, group: Optional[str] = None):
        self.group = group
        self._rules: Dict[str, Dict[str, str]] = {}

    def add_rule(self, category: str, name: str, rule: str) -> "RuleStoreBuilder":
        """Add or replace a rule; returns the builder for chaining."""
        self._rules.setdefault(category, {})[name] = rule
        return self

    def add_rules(self, rows: Iterable[Tuple[str, str, str]]) -> "RuleStoreBuilder":
        for category, name, rule in rows:
            self.add_rule(category, name, rule)
        return self

    def build(self) -> RuleStore:
        return RuleStore(self._rules, group=self.group)


def load_rule_store(path: Path, group: Optional[str] = None) -> RuleStore:
    """
    Load a rule store from a JSON or CSV rule file.

    Args:
        path: Rule file (.json or .csv)
        group: For CSV files, keep only rows of this group

    Returns:
        The loaded rule store

    Raises:
        SourceError: If the file cannot be read
        ConfigError: If the content is not a valid rule file
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SourceError(f"Unable to read rule file {path}: {exc}") from exc

    if path.suffix.lower() == ".csv":
        store = _rule_store_from_csv(text, path, group)
    else:
        store = _rule_store_from_json(text, path)
    logger.info("Loaded %d rules from %s", len(store), path)
    return store


def _rule_store_from_json(text: str, path: Path) -> RuleStore:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid rule file {path}: {exc}") from exc

    rules = data.get("rules") if isinstance(data, dict) else None
    if not isinstance(rules, dict):
        raise ConfigError(f"Invalid rule file {path}: missing \"rules\" object")

    builder = RuleStoreBuilder(group=data.get("group"))
    for category, entries in rules.items():
        if not isinstance(entries, dict):
            raise ConfigError(f"Invalid rule file {path}: category {category} is not an object")
        for name, rule in entries.items():
            builder.add_rule(category, name, str(rule))
    return builder.build()


def _rule_store_from_csv(text: str, path: Path, group: Optional[str]) -> RuleStore:
    reader = csv.DictReader(text.splitlines())
    missing = [name for name in CSV_FIELDS if name not in (reader.fieldnames or [])]
    if missing:
        raise ConfigError(f"Invalid rule file {path}: missing columns {', '.join(missing)}")

    builder = RuleStoreBuilder(group=group)
    for row in reader:
        if group and row["group"] != group:
            continue
        builder.add_rule(row["category"], row["name"], row["rule"])
    return builder.build()
