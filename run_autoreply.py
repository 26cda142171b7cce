"""CLI entry point for the template reply assistant."""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from autoreply.gmail import AuthenticationError, GmailClient, GmailError, IncomingEmail
from autoreply.logging_config import LOG_FORMATS, configure_logging
from autoreply.matcher import DetectionResult, find_matching_templates
from autoreply.reply import ReplyDraft, UnknownVariableError
from autoreply.templates import (
    JsonFileKeyValueStore,
    StorageError,
    Template,
    TemplateLibrary,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Suggest reply templates for an email and fill them in"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (overrides LOG_LEVEL env var)",
    )
    parser.add_argument(
        "--log-format",
        choices=LOG_FORMATS,
        default=None,
        help="Log output format (overrides LOG_FORMAT env var)",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Template library directory (overrides AUTOREPLY_DATA_DIR env var)",
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--email-file",
        metavar="PATH",
        help="Read the email text from a file ('-' for stdin)",
    )
    source.add_argument(
        "--gmail-message",
        metavar="ID",
        help="Fetch the email to answer from Gmail by message ID",
    )

    parser.add_argument(
        "--top",
        type=int,
        default=5,
        help="Number of matching templates to list (default: 5)",
    )
    select = parser.add_mutually_exclusive_group()
    select.add_argument("--use", metavar="TEMPLATE_ID", help="Render this template")
    select.add_argument(
        "--auto-select",
        action="store_true",
        help="Render the best matching template",
    )
    parser.add_argument(
        "--var",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Fill a template placeholder (repeatable)",
    )
    parser.add_argument(
        "--mailto",
        nargs="?",
        const="",
        default=None,
        metavar="ADDRESS",
        help="Print a mailto: link for the rendered reply",
    )
    parser.add_argument(
        "--gmail-draft",
        metavar="ADDRESS",
        nargs="?",
        const="",
        default=None,
        help="Save the rendered reply as a Gmail draft "
        "(defaults to the sender of --gmail-message)",
    )

    manage = parser.add_argument_group("template library")
    manage.add_argument("--list-templates", action="store_true", help="List templates")
    manage.add_argument("--category", help="Filter --list-templates by category id")
    manage.add_argument("--search", help="Filter --list-templates by text")
    manage.add_argument("--import", dest="import_path", metavar="FILE", help="Import templates")
    manage.add_argument("--export", dest="export_path", metavar="FILE", help="Export templates")
    manage.add_argument(
        "--reset-demo",
        action="store_true",
        help="Replace the library with the demo templates",
    )
    return parser


def parse_variables(pairs: list[str]) -> dict[str, str]:
    """Parse NAME=VALUE pairs from --var."""
    variables = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name.strip():
            raise ValueError(f"Expected NAME=VALUE, got '{pair}'")
        variables[name.strip()] = value
    return variables


def read_email_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8")


def print_templates(library: TemplateLibrary, templates: list[Template]) -> None:
    for template in templates:
        category = library.get_category(template.category)
        star = "*" if library.is_favorite(template.id) else " "
        print(f"{star} {template.id:<20} {template.name}  [{category.name}]")
        print(f"    triggers: {', '.join(template.triggers)}")


def print_matches(result: DetectionResult, top: int) -> None:
    print(f"Detected keywords: {', '.join(result.keywords) or '(none)'}")
    if not result.matches:
        print("No matching templates.")
        return
    print("\n--- Matching Templates ---")
    for entry in result.matches[:top]:
        print(f"  {entry.score:5.0%}  {entry.template.name} ({entry.template.id})")
        print(f"         matched: {', '.join(entry.matched_triggers)}")


def manage_library(args: argparse.Namespace, library: TemplateLibrary) -> int:
    if args.reset_demo:
        library.reset_to_demo()
        print(f"Library reset to {len(library.templates)} demo templates.")

    if args.import_path:
        result = library.import_templates(Path(args.import_path).read_text(encoding="utf-8"))
        if not result.success:
            print(f"ERROR: import failed: {result.error}", file=sys.stderr)
            return 1
        print(f"Imported {result.count} templates.")

    if args.export_path:
        target = library.export_to_file(Path(args.export_path))
        print(f"Exported {len(library.templates)} templates to {target}")

    if args.list_templates:
        templates = library.get_by_category(args.category)
        if args.search:
            found = {t.id for t in library.search_templates(args.search)}
            templates = [t for t in templates if t.id in found]
        print_templates(library, templates)
    return 0


def render_reply(
    args: argparse.Namespace,
    library: TemplateLibrary,
    result: DetectionResult,
    email: IncomingEmail | None,
    gmail: GmailClient | None,
) -> int:
    if args.use:
        template = library.get_template(args.use)
        if template is None:
            print(f"ERROR: no template with id '{args.use}'", file=sys.stderr)
            return 1
    else:
        if result.top_match is None:
            print("ERROR: no template matched, nothing to render", file=sys.stderr)
            return 1
        template = result.top_match.template

    draft = ReplyDraft.from_template(template)
    for name, value in parse_variables(args.var).items():
        draft.set_variable(name, value)
    library.add_to_recent(template.id)

    print(f"\n--- {template.name} ---")
    print(draft.body)
    if draft.missing_variables:
        labels = draft.labels
        missing = ", ".join(f"{labels[n]} ({n})" for n in draft.missing_variables)
        print(f"\nUnfilled: {missing}")

    if args.mailto is not None:
        to = args.mailto or (email.sender_email if email else "")
        print(f"\n{draft.to_mailto_url(to)}")

    if args.gmail_draft is not None:
        to = args.gmail_draft or (email.sender_email if email else "")
        if not to:
            print("ERROR: --gmail-draft needs a recipient address", file=sys.stderr)
            return 1
        client = gmail or GmailClient()
        draft_id = client.create_draft(
            draft,
            to=to,
            thread_id=email.thread_id if email else None,
            in_reply_to=email.message_id_header if email else None,
        )
        print(f"\nGmail draft created: {draft_id}")
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()

    args = build_parser().parse_args(argv)
    configure_logging(level_override=args.log_level, format_override=args.log_format)

    try:
        library = TemplateLibrary(store=JsonFileKeyValueStore(args.data_dir))
        status = manage_library(args, library)
        if status:
            return status

        email = None
        gmail = None
        if args.gmail_message:
            gmail = GmailClient()
            email = gmail.fetch_message(args.gmail_message)
            email_text = email.matching_text
        elif args.email_file:
            email_text = read_email_text(args.email_file)
        elif args.use:
            email_text = ""
        else:
            return 0

        result = find_matching_templates(email_text, library.templates)
        if email_text:
            print_matches(result, args.top)

        if args.use or args.auto_select:
            return render_reply(args, library, result, email, gmail)
        return 0
    except (UnknownVariableError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except (OSError, StorageError, GmailError, AuthenticationError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
