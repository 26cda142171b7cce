"""{{variable}} placeholder extraction, substitution and labelling."""

import re

PLACEHOLDER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


def placeholder(name: str) -> str:
    """Render the placeholder marker for a variable name."""
    return "{{" + name + "}}"


def extract_variables(body: str) -> list[str]:
    """Extract unique placeholder names from a template body.

    Only the exact {{identifier}} form is recognized; unbalanced or
    nested braces are ignored.

    Args:
        body: Template body text.

    Returns:
        Variable names in order of first occurrence.
    """
    names: dict[str, None] = {}
    for match in PLACEHOLDER_PATTERN.finditer(body or ""):
        names.setdefault(match.group(1), None)
    return list(names)


def fill_template(body: str, variables: dict[str, str]) -> str:
    """Substitute variable values into a template body.

    Every occurrence of each placeholder is replaced. An empty value keeps
    the placeholder itself so unfilled fields stay visible in a preview.
    Keys that do not occur in the body are ignored.

    Args:
        body: Template body text.
        variables: Mapping of variable name to value.

    Returns:
        The filled body.
    """
    result = body
    for key, value in variables.items():
        marker = placeholder(key)
        result = result.replace(marker, value or marker)
    return result


def variable_to_label(variable: str) -> str:
    """Convert a camelCase variable name to a display label.

    Examples:
        startDate -> Start Date
        option1 -> Option 1
    """
    label = re.sub(r"([A-Z])", r" \1", variable)
    label = label[:1].upper() + label[1:]
    label = re.sub(r"([0-9]+)", r" \1", label)
    return label.strip()
