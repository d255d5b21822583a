"""
Rule Engine - placeholder substitution and embedded arithmetic.

Rule templates contain placeholders such as ``%size%`` and may embed integer
expressions between ``[!`` and ``!]``:

    DECIMAL([!%size%-%scale%!],[!%scale%!])

After substitution (size=5, scale=2) the template reads
``DECIMAL([!5-2!],[!2!])`` and process_rule() turns it into ``DECIMAL(3,2)``.

Expressions use the grammar ``digits (('+' | '-') digits)*`` and are
evaluated strictly left to right.
"""

import re
from typing import Mapping, Optional

from cobol_dataimport.exceptions import RuleError
from cobol_dataimport.logging_config import get_logger

logger = get_logger("rules")

EXPR_START = "[!"
EXPR_END = "!]"

EXPRESSION_PATTERN = re.compile(r"[0-9]+([+-][0-9]+)*")
OPERAND_PATTERN = re.compile(r"[+-]?[0-9]+")


def is_valid(expression: str) -> bool:
    """Check an expression against the arithmetic grammar."""
    return EXPRESSION_PATTERN.fullmatch(expression) is not None


def evaluate_expression(expression: str) -> str:
    """
    Evaluate an addition/subtraction expression left to right.

    Args:
        expression: e.g. "30+20-15"; surrounding blanks are ignored

    Returns:
        The result as a decimal string

    Raises:
        RuleError: If the expression does not follow the grammar
    """
    expression = expression.strip()
    if not is_valid(expression):
        raise RuleError(f'Invalid expression "{expression}"', expression=expression)
    # Each operand carries its own sign, so summing is left-to-right evaluation
    return str(sum(int(operand) for operand in OPERAND_PATTERN.findall(expression)))


def process_rule(rule: str) -> str:
    """
    Replace every ``[!expr!]`` span in a rule with its value.

    Args:
        rule: Rule text with placeholders already substituted

    Returns:
        The rule with all expressions evaluated; unchanged if it has none

    Raises:
        RuleError: If a span is unterminated or its expression is invalid
    """
    if EXPR_START not in rule:
        return rule

    result = []
    position = 0
    while True:
        start = rule.find(EXPR_START, position)
        if start == -1:
            result.append(rule[position:])
            break
        end = rule.find(EXPR_END, start + len(EXPR_START))
        if end == -1:
            raise RuleError(f'Invalid rule "{rule}"', rule=rule)

        expression = rule[start + len(EXPR_START):end].strip()
        if not is_valid(expression):
            raise RuleError(
                f'Invalid expression "{expression}" in rule "{rule}"',
                rule=rule,
                expression=expression,
            )
        result.append(rule[position:start])
        result.append(evaluate_expression(expression))
        position = end + len(EXPR_END)
    return "".join(result)


def apply_placeholders(template: str, values: Mapping[str, str]) -> str:
    """
    Substitute ``%key%`` placeholders.

    Args:
        template: Rule template
        values: Placeholder name (without percent signs) -> replacement

    Returns:
        The template with every known placeholder replaced
    """
    for key, value in values.items():
        template = template.replace(f"%{key}%", value)
    return template


def resolve_rule(
    store,
    category: str,
    name: str,
    values: Mapping[str, str],
    default: Optional[str] = None,
) -> Optional[str]:
    """
    Look up a rule, substitute placeholders and evaluate expressions.

    Args:
        store: RuleStore to query
        category: Rule category
        name: Rule name
        values: Placeholder values
        default: Returned unchanged when no rule exists

    Returns:
        The processed rule, or ``default`` on a lookup miss
    """
    rule = store.get_rule(category, name)
    if rule is None:
        logger.debug("No %s rule for %r", category, name)
        return default
    return process_rule(apply_placeholders(rule, values))
