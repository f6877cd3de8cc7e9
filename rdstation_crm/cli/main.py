"""Main CLI entry point for the RD Station CRM client."""

import argparse
import dataclasses
import json
import logging
import sys

from rdstation_crm.core import (
    ClientConfig,
    ConfigError,
    RDStationError,
    ApiError,
    save_config,
    load_config,
)
from rdstation_crm.client import create_client
from rdstation_crm.resources.deals import (
    CreateDealData,
    CreateDealRequest,
    ListDealsFilter,
    UpdateDealData,
    UpdateDealRequest,
)
from rdstation_crm.resources.contacts import (
    CreateContactData,
    CreateContactRequest,
    EmailData,
    ListContactsFilter,
    PhoneData,
    UpdateContactData,
    UpdateContactRequest,
)

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )
    # httpx logs every request URL at INFO, and the URL carries the token
    logging.getLogger("httpx").setLevel(logging.WARNING)


def print_record(record):
    """Print a record as indented JSON."""
    print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))


def filter_from_args(filter_cls, args):
    """Build a listing filter from the parsed options named after its fields."""
    values = {}
    for record_field in dataclasses.fields(filter_cls):
        value = getattr(args, record_field.name, None)
        if value is not None:
            values[record_field.name] = value
    return filter_cls(**values)


def run_with_client(args, call):
    """
    Run an API call with a configured client and print the result.

    Exits with status 1 on configuration or API errors.
    """
    try:
        with create_client(token=args.token, base_url=args.base_url) as client:
            result = call(client)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    except ApiError as e:
        print(f"API error (HTTP {e.status_code}): {e.body}", file=sys.stderr)
        sys.exit(1)
    except RDStationError as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose and e.cause is not None:
            print(f"Caused by: {e.cause!r}", file=sys.stderr)
        sys.exit(1)

    print_record(result)


def cmd_configure(args):
    """Handle the configure command."""
    try:
        current = load_config(token=args.token, base_url=args.base_url)
        config = ClientConfig(
            token=current.token,
            base_url=current.base_url,
            timeout_seconds=args.timeout or current.timeout_seconds,
        )
        path = save_config(config)
    except ConfigError as e:
        print(f"Error saving configuration: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Configuration saved to: {path}")
    print(f"  Base URL: {config.base_url}")
    print(f"  Timeout:  {config.timeout_seconds}s")


def cmd_list_deals(args):
    """Handle the list-deals command."""
    deal_filter = filter_from_args(ListDealsFilter, args)
    run_with_client(args, lambda client: client.list_deals(deal_filter))


def cmd_create_deal(args):
    """Handle the create-deal command."""
    request = CreateDealRequest(
        deal=CreateDealData(
            name=args.name,
            deal_stage_id=args.deal_stage_id,
            user_id=args.user_id,
            rating=args.rating,
            prediction_date=args.prediction_date,
        )
    )
    run_with_client(args, lambda client: client.create_deal(request))


def cmd_update_deal(args):
    """Handle the update-deal command."""
    request = UpdateDealRequest(
        deal=UpdateDealData(
            name=args.name,
            deal_stage_id=args.deal_stage_id,
            win=args.win,
            hold=args.hold,
            deal_lost_note=args.lost_note,
            rating=args.rating,
        )
    )
    run_with_client(args, lambda client: client.update_deal(args.id, request))


def cmd_list_contacts(args):
    """Handle the list-contacts command."""
    contact_filter = filter_from_args(ListContactsFilter, args)
    run_with_client(args, lambda client: client.list_contacts(contact_filter))


def cmd_create_contact(args):
    """Handle the create-contact command."""
    request = CreateContactRequest(
        contact=CreateContactData(
            name=args.name,
            emails=[EmailData(email=e) for e in args.email] if args.email else None,
            phones=[PhoneData(phone=p) for p in args.phone] if args.phone else None,
            organization_id=args.organization_id,
        )
    )
    run_with_client(args, lambda client: client.create_contact(request))


def cmd_update_contact(args):
    """Handle the update-contact command."""
    request = UpdateContactRequest(
        contact=UpdateContactData(
            name=args.name,
            title=args.title,
            emails=[EmailData(email=e) for e in args.email] if args.email else None,
            organization_id=args.organization_id,
        )
    )
    run_with_client(args, lambda client: client.update_contact(args.id, request))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="rdstation-crm",
        description="RD Station CRM command line client",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--token", help="API token (or set RD_STATION_TOKEN)")
    parser.add_argument("--base-url", help="API base URL (or set RD_STATION_BASE_URL)")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Configure command
    configure_parser = subparsers.add_parser("configure", help="Save token and base URL")
    configure_parser.add_argument("--timeout", type=float, help="Default request timeout in seconds")
    configure_parser.set_defaults(func=cmd_configure)

    # List-deals command
    list_deals_parser = subparsers.add_parser("list-deals", help="List deals")
    for option in (
        "page", "limit", "order", "direction", "name", "exact-name", "win",
        "user-id", "deal-stage-id", "deal-pipeline-id", "campaign-id",
        "organization", "hold", "next-page",
    ):
        list_deals_parser.add_argument(f"--{option}")
    list_deals_parser.set_defaults(func=cmd_list_deals)

    # Create-deal command
    create_deal_parser = subparsers.add_parser("create-deal", help="Create a deal")
    create_deal_parser.add_argument("--name", required=True, help="Deal name")
    create_deal_parser.add_argument("--deal-stage-id")
    create_deal_parser.add_argument("--user-id")
    create_deal_parser.add_argument("--rating", type=int)
    create_deal_parser.add_argument("--prediction-date")
    create_deal_parser.set_defaults(func=cmd_create_deal)

    # Update-deal command
    update_deal_parser = subparsers.add_parser("update-deal", help="Update a deal")
    update_deal_parser.add_argument("--id", required=True, help="Deal ID")
    update_deal_parser.add_argument("--name")
    update_deal_parser.add_argument("--deal-stage-id")
    update_deal_parser.add_argument("--win", choices=["true", "false", "null"])
    update_deal_parser.add_argument("--hold", choices=["true", "false"])
    update_deal_parser.add_argument("--lost-note")
    update_deal_parser.add_argument("--rating", type=float)
    update_deal_parser.set_defaults(func=cmd_update_deal)

    # List-contacts command
    list_contacts_parser = subparsers.add_parser("list-contacts", help="List contacts")
    for option in ("page", "limit", "order", "direction", "email", "q", "phone", "title"):
        list_contacts_parser.add_argument(f"--{option}")
    list_contacts_parser.set_defaults(func=cmd_list_contacts)

    # Create-contact command
    create_contact_parser = subparsers.add_parser("create-contact", help="Create a contact")
    create_contact_parser.add_argument("--name", required=True, help="Contact name")
    create_contact_parser.add_argument("--email", action="append", help="Email (repeatable)")
    create_contact_parser.add_argument("--phone", action="append", help="Phone (repeatable)")
    create_contact_parser.add_argument("--organization-id")
    create_contact_parser.set_defaults(func=cmd_create_contact)

    # Update-contact command
    update_contact_parser = subparsers.add_parser("update-contact", help="Update a contact")
    update_contact_parser.add_argument("--id", required=True, help="Contact ID")
    update_contact_parser.add_argument("--name")
    update_contact_parser.add_argument("--title")
    update_contact_parser.add_argument("--email", action="append", help="Email (repeatable)")
    update_contact_parser.add_argument("--organization-id")
    update_contact_parser.set_defaults(func=cmd_update_contact)

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
