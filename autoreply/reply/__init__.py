"""Reply drafting: placeholder handling and the ReplyDraft model.

Public API:
    - extract_variables: Placeholder names in a template body
    - fill_template: Substitute values, keeping unfilled placeholders visible
    - variable_to_label: camelCase name to display label
    - ReplyDraft: A template selected for replying, with its variable values
    - ReplyError, UnknownVariableError: Exceptions
"""

from .exceptions import ReplyError, UnknownVariableError
from .models import ReplyDraft
from .placeholders import extract_variables, fill_template, variable_to_label

__all__ = [
    "extract_variables",
    "fill_template",
    "variable_to_label",
    "ReplyDraft",
    "ReplyError",
    "UnknownVariableError",
]
