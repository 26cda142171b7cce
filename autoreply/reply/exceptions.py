"""Exceptions for reply drafting."""


class ReplyError(Exception):
    """Base exception for reply drafting errors."""

    pass


class UnknownVariableError(ReplyError):
    """Raised when setting a variable the template body does not contain."""

    def __init__(self, variable: str, template_id: str):
        self.variable = variable
        self.template_id = template_id
        super().__init__(
            f"Template '{template_id}' has no placeholder named '{variable}'"
        )
