from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence

from incident_logger.bootstrap import load_dotenv
from incident_logger.config import Settings
from incident_logger.controller import IncidentLogger
from incident_logger.domain.errors import IncidentNotFoundError, SubmissionError
from incident_logger.domain.models import INJURY_TYPE_LABELS, SEVERITY_LABELS
from incident_logger.observability.logging import setup_logging
from incident_logger.publisher.telegram_client import TelegramNotifier
from incident_logger.render.views import (
    IncidentView,
    render_incident_line,
    render_incident_text,
    render_page,
)
from incident_logger.storage.local_storage import LocalStorage
from incident_logger.storage.repository import IncidentRepository

logger = logging.getLogger("incident_logger")


def prompt_confirm(message: str) -> bool:
    try:
        answer = input(f"{message} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


def _always_yes(message: str) -> bool:
    logger.debug("auto-confirmed: %s", message)
    return True


def _print_toast(message: str) -> None:
    print(message)


def build_logger_app(
    settings: Settings,
    confirm: Callable[[str], bool] = prompt_confirm,
    toast: Callable[[str], None] = _print_toast,
) -> IncidentLogger:
    repository = IncidentRepository(LocalStorage(settings.storage_url), key=settings.storage_key)
    view = IncidentView(settings.view_path or None)
    notifier = TelegramNotifier(
        settings.telegram_bot_token,
        settings.telegram_chat_id,
        settings.notify_severities,
    )
    return IncidentLogger(repository, view, confirm=confirm, toast=toast, notifier=notifier)


def cmd_log(app: IncidentLogger, args: argparse.Namespace) -> int:
    defaults = app.form_defaults()
    form = {
        "date": args.date or defaults["date"],
        "time": args.time or defaults["time"],
        "location": args.location,
        "description": args.description,
        "injuryType": args.injury_type,
        "severity": args.severity,
        "personInvolved": args.person,
        "witnesses": args.witnesses,
    }
    try:
        incident = app.submit(form)
    except SubmissionError as exc:
        for field_name, message in exc.field_errors.items():
            print(f"{field_name}: {message}", file=sys.stderr)
        return 1
    print(incident.incident_id)
    return 0


def cmd_list(app: IncidentLogger, args: argparse.Namespace) -> int:
    app.set_severity_filter(args.severity)
    incidents = app.filtered_incidents()
    if not incidents:
        print("No incidents logged yet.")
        return 0
    for incident in incidents:
        print(render_incident_line(incident))
    return 0


def cmd_show(app: IncidentLogger, args: argparse.Namespace) -> int:
    if args.html:
        body = app.show_incident_details(args.incident_id)
        if body is None:
            print(f"incident not found: {args.incident_id}", file=sys.stderr)
            return 1
        print(body)
        app.close_modal()
        return 0

    try:
        incident = app.get_incident(args.incident_id)
    except IncidentNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(render_incident_text(incident))
    return 0


def cmd_delete(app: IncidentLogger, args: argparse.Namespace) -> int:
    try:
        app.get_incident(args.incident_id)
    except IncidentNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    return 0 if app.delete_incident(args.incident_id) else 1


def cmd_clear(app: IncidentLogger, args: argparse.Namespace) -> int:
    return 0 if app.clear_all_incidents() else 1


def cmd_export(app: IncidentLogger, args: argparse.Namespace) -> int:
    app.set_severity_filter(args.severity)
    page = render_page(app.filtered_incidents(), app.view.severity_filter)
    with open(args.path, "w", encoding="utf-8") as fh:
        fh.write(page)
    logger.info("page exported | path=%s", args.path)
    print(args.path)
    return 0


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Health & safety incident log")
    parser.add_argument("--env-file", default=".env", help="dotenv file to load before reading settings")
    sub = parser.add_subparsers(dest="command", required=True)

    log_p = sub.add_parser("log", help="log a new incident")
    log_p.add_argument("--date", help="YYYY-MM-DD, defaults to today")
    log_p.add_argument("--time", help="HH:MM, defaults to now")
    log_p.add_argument("--location", required=True)
    log_p.add_argument("--description", required=True)
    log_p.add_argument("--injury-type", required=True, choices=list(INJURY_TYPE_LABELS))
    log_p.add_argument("--severity", required=True, choices=list(SEVERITY_LABELS))
    log_p.add_argument("--person", required=True, help="person involved")
    log_p.add_argument("--witnesses", default="")
    log_p.set_defaults(handler=cmd_log)

    list_p = sub.add_parser("list", help="list incidents, most recent first")
    list_p.add_argument("--severity", choices=list(SEVERITY_LABELS))
    list_p.set_defaults(handler=cmd_list)

    show_p = sub.add_parser("show", help="show one incident in detail")
    show_p.add_argument("incident_id")
    show_p.add_argument("--html", action="store_true", help="print the HTML detail view")
    show_p.set_defaults(handler=cmd_show)

    delete_p = sub.add_parser("delete", help="delete one incident")
    delete_p.add_argument("incident_id")
    delete_p.add_argument("--yes", action="store_true", help="skip the confirmation prompt")
    delete_p.set_defaults(handler=cmd_delete)

    clear_p = sub.add_parser("clear", help="delete ALL incidents")
    clear_p.add_argument("--yes", action="store_true", help="skip the confirmation prompt")
    clear_p.set_defaults(handler=cmd_clear)

    export_p = sub.add_parser("export", help="write the incident list as a standalone HTML page")
    export_p.add_argument("path")
    export_p.add_argument("--severity", choices=list(SEVERITY_LABELS))
    export_p.set_defaults(handler=cmd_export)

    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    load_dotenv(args.env_file)
    settings = Settings.from_env()

    setup_logging(
        level=settings.log_level,
        json_logs=settings.json_logs,
    )

    confirm = _always_yes if getattr(args, "yes", False) else prompt_confirm
    app = build_logger_app(settings, confirm=confirm)
    return args.handler(app, args)


if __name__ == "__main__":
    sys.exit(main())
