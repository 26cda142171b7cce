"""Template-based email reply assistant.

Matches pasted email text against a personal library of reply templates
and fills in the chosen template's placeholders.
"""

__version__ = "0.1.0"
