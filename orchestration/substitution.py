"""Prompt variable substitution for workflow templates."""

import json
import re
from collections.abc import Mapping

TOKEN_PATTERN = re.compile(r"\{([\w.-]+)\}")


def stringify(value: object) -> str:
    """Render a variable value the way it reads inside a prompt."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else stringify(item) for item in value)
    if isinstance(value, dict):
        return json.dumps(value, default=str)
    return str(value)


def replace_variables(
    text: str, variables: Mapping[str, object], results: Mapping[str, object]
) -> str:
    """Replace ``{name}`` tokens from the variable and results maps.

    A name bound in both maps takes the step result. Results are inserted
    as JSON, also where a variable value references a step id. Tokens
    bound in neither map are left untouched.

    Args:
        text: Prompt text
        variables: Variable bindings of the run
        results: Outputs of the steps run so far, keyed by step id

    Returns:
        Processed prompt
    """

    def _result(match: re.Match) -> str:
        name = match.group(1)
        if name in results:
            return json.dumps(results[name], default=str)
        return match.group(0)

    def _substitute(match: re.Match) -> str:
        name = match.group(1)
        if name in results:
            return json.dumps(results[name], default=str)
        if name in variables:
            # Variable values may reference earlier step results
            return TOKEN_PATTERN.sub(_result, stringify(variables[name]))
        return match.group(0)

    return TOKEN_PATTERN.sub(_substitute, text or "")
