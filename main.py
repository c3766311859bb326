import sys
import os
import argparse
import json

from langkeeper_logger import get_logger, set_console_level
logger = get_logger("main")

if __file__:
    application_path = os.path.dirname(os.path.abspath(__file__))
    if application_path not in sys.path:
        sys.path.insert(0, application_path)
    logger.debug(f"Running from script. Added to sys.path: {application_path}")

import langkeeper_config as config
from langkeeper_settings import load_settings
import locales
from locales import tr
from controllers.session_controller import SessionController
from core.dialects import DIALECTS


def build_parser():
    parser = argparse.ArgumentParser(
        prog="langkeeper",
        description="Extract translation keys from a JS/TS/Vue file and keep its locale table in sync (LangKeeper).",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
        )
    parser.add_argument(
        "usage_file",
        help="Source file whose translation key usages are extracted."
    )
    parser.add_argument(
        "-m", "--mode",
        default=None,
        help=f"Project dialect ({', '.join(DIALECTS)}); defaults to the 'default_mode' setting."
    )
    parser.add_argument(
        "--merge",
        action="store_true",
        help="Add placeholder entries for used keys missing from the table."
    )
    parser.add_argument(
        "--add",
        nargs=3, action="append", default=[], metavar=("KEY", "ZH", "EN"),
        help="Add a table entry."
    )
    parser.add_argument(
        "--set",
        nargs=3, action="append", default=[], metavar=("KEY", "LOCALE", "VALUE"),
        help="Set one locale value of an existing entry."
    )
    parser.add_argument(
        "--delete-key",
        action="append", default=[], metavar="KEY",
        help="Remove an entry from the locale table."
    )
    parser.add_argument(
        "--delete-usage",
        action="append", default=[], metavar="KEY",
        help="Drop a key from the usage list."
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the pending changes without writing anything."
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the session as JSON."
    )
    parser.add_argument(
        "--ui-lang",
        choices=sorted(locales.SUPPORTED_UI_LANGUAGES),
        default=None,
        help="Language of the printed reports; defaults to the 'ui_language' setting."
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log debug output to the console."
    )
    return parser


def session_payload(controller):
    """JSON-friendly dump of the session view and the pending diff."""
    view = controller.view()
    result = controller.model.pending_diff()
    return {
        "usage_file": str(view.usage_file),
        "mode": controller.dialect.name,
        "table_paths": {locale.value: str(path) for locale, path in view.table_paths.items()},
        "usages": [{"key": u.key, "source_file": str(u.source_file)} for u in view.usages],
        "table": view.table.rows(),
        "diff": {
            "push": [e.key for e in result.push],
            "zh_edit": [e.key for e in result.zh_edit],
            "en_edit": [e.key for e in result.en_edit],
            "delete": [e.key for e in result.delete],
        },
    }


def print_report(controller):
    view = controller.view()
    print(tr("cli_usages_header", count=len(view.usages)))
    for usage in view.usages:
        print(f"  {usage.key}")
    print(tr("cli_table_header", count=len(view.table)))
    for row in view.table.rows():
        print(f"  {row['key']}: zh={row['zh']!r} en={row['en']!r}")

    result = controller.model.pending_diff()
    print(tr("cli_diff_header"))
    if result.is_empty():
        print(tr("cli_diff_empty"))
        return
    for label, entries in (("+", result.push), ("zh~", result.zh_edit),
                           ("en~", result.en_edit), ("-", result.delete)):
        for entry in entries:
            print(f"  {label} {entry.key}")


def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.verbose:
        set_console_level("DEBUG")

    settings = load_settings()
    ui_lang = args.ui_lang or settings.get("ui_language", config.DEFAULT_UI_LANGUAGE)
    locales.set_language(ui_lang)

    errors = []
    controller = SessionController(settings)
    controller.session_error.connect(errors.append)
    controller.session_error.connect(lambda message: print(message, file=sys.stderr))
    if not args.json:
        controller.status_message.connect(print)

    if controller.start_session(args.usage_file, args.mode) is None:
        return 1

    if args.merge:
        controller.merge_usages_into_table()
    for key, zh, en in args.add:
        controller.add_entry(key, {"zh": zh, "en": en})
    for key, locale, value in args.set:
        controller.edit_entry(key, locale, value)
    for key in args.delete_key:
        controller.delete_locale_entry(key)
    for key in args.delete_usage:
        controller.delete_usage(key)

    if args.json:
        print(json.dumps(session_payload(controller), ensure_ascii=False, indent=2))
    else:
        print_report(controller)

    if args.dry_run:
        if not args.json:
            print(tr("cli_dry_run"))
    elif not controller.save():
        return 1

    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
