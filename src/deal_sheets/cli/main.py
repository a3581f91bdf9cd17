"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path


def _add_source_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--spreadsheet",
        type=str,
        default=None,
        help="Spreadsheet ID or URL (default: DEAL_SHEETS_SPREADSHEET)",
    )
    parser.add_argument(
        "--api-key",
        type=str,
        default=None,
        help="Google API key with Sheets API enabled (default: DEAL_SHEETS_API_KEY)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to settings YAML (used instead of environment variables)",
    )


def main(argv: list[str] | None = None) -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(prog="deal-sheets", description="Load deal records from Google Sheets")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # load
    load_parser = subparsers.add_parser("load", help="Load, normalize and filter deals")
    _add_source_args(load_parser)
    load_parser.add_argument(
        "--range",
        type=str,
        default=None,
        help="Sheet name or range, e.g. 'Sheet1' or 'Deals!A1:Z999' (default: Sheet1)",
    )
    load_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write deals JSON to file (default: stdout)",
    )
    load_parser.add_argument(
        "--allow-empty",
        action="store_true",
        help="Exit 0 with an empty list when every row is filtered out",
    )

    # check
    check_parser = subparsers.add_parser("check", help="Check the spreadsheet is reachable")
    _add_source_args(check_parser)

    # sheets
    sheets_parser = subparsers.add_parser("sheets", help="List sheet names in the spreadsheet")
    _add_source_args(sheets_parser)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "load":
        _run_load(args)
    elif args.command == "check":
        _run_check(args)
    elif args.command == "sheets":
        _run_sheets(args)
    else:
        parser.print_help()


def _settings(args: argparse.Namespace):
    """Settings from --config or the environment, with CLI flags applied on top."""
    from deal_sheets.config import LoadSettings

    base = LoadSettings.from_yaml(args.config) if args.config else LoadSettings.from_env()
    return base.merged(
        spreadsheet=args.spreadsheet,
        api_key=args.api_key,
        range=getattr(args, "range", None),
    )


def _connector(settings):
    from deal_sheets.connectors.google_sheets import GoogleSheetsConnector

    return GoogleSheetsConnector(base_url=settings.base_url, timeout=settings.timeout)


def _run_load(args: argparse.Namespace) -> None:
    """Run load command."""
    from deal_sheets.errors import DealSheetsError, NoDeals
    from deal_sheets.pipeline import load_deals

    settings = _settings(args)
    try:
        deals = load_deals(
            settings.spreadsheet or "",
            settings.api_key or "",
            settings.range,
            connector=_connector(settings),
        )
        if not deals and not args.allow_empty:
            raise NoDeals()
    except DealSheetsError as e:
        raise SystemExit(f"Error: {e}")

    output = json.dumps([d.to_record() for d in deals], indent=2, default=str)

    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote {len(deals)} deals to {args.output}")
    else:
        print(output)


def _run_check(args: argparse.Namespace) -> None:
    """Run check command."""
    from deal_sheets.errors import DealSheetsError
    from deal_sheets.pipeline import resolve_source

    settings = _settings(args)
    try:
        spreadsheet_id = resolve_source(settings.spreadsheet or "", settings.api_key or "")
    except DealSheetsError as e:
        raise SystemExit(f"Error: {e}")

    check = _connector(settings).validate(spreadsheet_id, settings.api_key or "")
    if not check.valid:
        raise SystemExit(f"Error: {check.reason}")
    print(f"OK: {spreadsheet_id}")


def _run_sheets(args: argparse.Namespace) -> None:
    """Run sheets command."""
    from deal_sheets.locator import extract_spreadsheet_id

    settings = _settings(args)
    spreadsheet_id = extract_spreadsheet_id(settings.spreadsheet)
    names = _connector(settings).list_table_names(spreadsheet_id, settings.api_key or "")
    for name in names:
        print(name)


if __name__ == "__main__":
    main(sys.argv[1:])
