"""Reply draft model: a selected template plus its variable values."""

from dataclasses import dataclass, field
from urllib.parse import quote

from autoreply.templates.models import Template

from .exceptions import UnknownVariableError
from .placeholders import extract_variables, fill_template, variable_to_label


@dataclass
class ReplyDraft:
    """A reply being composed from a template.

    Attributes:
        template: The selected template
        variables: Current value of every placeholder in the template body
            (empty string while unfilled)
    """

    template: Template
    variables: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_template(cls, template: Template) -> "ReplyDraft":
        """Start a draft with every placeholder unfilled."""
        return cls(
            template=template,
            variables={name: "" for name in extract_variables(template.body)},
        )

    @property
    def body(self) -> str:
        return fill_template(self.template.body, self.variables)

    @property
    def subject(self) -> str:
        return f"Re: {self.template.name}"

    @property
    def missing_variables(self) -> list[str]:
        """Placeholders that are still unfilled, in body order."""
        return [name for name, value in self.variables.items() if not value]

    @property
    def labels(self) -> dict[str, str]:
        return {name: variable_to_label(name) for name in self.variables}

    def set_variable(self, name: str, value: str) -> None:
        """Set a placeholder value.

        Raises:
            UnknownVariableError: If the template body has no such placeholder.
        """
        if name not in self.variables:
            raise UnknownVariableError(name, self.template.id)
        self.variables[name] = value

    def to_mailto_url(self, to: str = "") -> str:
        """Build a mailto: URL that opens the reply in the default mail client."""
        return (
            f"mailto:{quote(to, safe='@,')}"
            f"?subject={quote(self.subject, safe='')}"
            f"&body={quote(self.body, safe='')}"
        )
