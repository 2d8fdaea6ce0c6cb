#!/usr/bin/env python3
"""
Unified CLI for the garage fleet.

Commands:
  list        - List vehicles in the garage
  show        - Show a vehicle's details, history and appointments
  add         - Add a vehicle
  remove      - Remove a vehicle and its history
  set-status  - Change a vehicle's status
  log         - Add a maintenance record (past service or appointment)
  unlog       - Remove a maintenance record
  upcoming    - Show maintenance due within the next few days
  schedule    - Show every future appointment
"""

import argparse
import logging
import sys
from datetime import date, datetime, time
from typing import List, Optional

from tabulate import tabulate

from garage import (
    Config,
    FileStore,
    Garage,
    MaintenanceRecord,
    UpcomingMaintenance,
    ValidationError,
    Vehicle,
    create_vehicle,
    load_config,
)

VEHICLE_TYPES = {
    "vehicle": "Vehicle",
    "car": "Car",
    "sports-car": "SportsCar",
    "truck": "Truck",
}

# =============================================================================
# Formatting helpers
# =============================================================================


def format_cost(cost: Optional[float]) -> str:
    """Format cost for display."""
    return f"${cost:,.2f}" if cost is not None else "-"


def format_when(when: datetime) -> str:
    """Format a record date for display, with time only when set."""
    if when.time() == time.min:
        return f"{when:%Y-%m-%d}"
    return f"{when:%Y-%m-%d %H:%M}"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if not text:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def make_vehicle_table(vehicles: List[Vehicle]) -> List[List[str]]:
    """Convert vehicles to table rows."""
    rows = []
    for vehicle in vehicles:
        rows.append(
            [
                vehicle.id,
                vehicle.variant_tag,
                vehicle.name,
                vehicle.color,
                vehicle.status,
                str(len(vehicle.maintenance_history)),
            ]
        )
    return rows


def make_record_table(records: List[MaintenanceRecord]) -> List[List[str]]:
    """Convert maintenance records to table rows."""
    rows = []
    for record in records:
        rows.append(
            [
                format_when(record.date),
                record.service_type,
                format_cost(record.cost),
                truncate(record.description),
                record.id,
            ]
        )
    return rows


def make_upcoming_table(entries: List[UpcomingMaintenance]) -> List[List[str]]:
    """Convert upcoming maintenance to table rows."""
    rows = []
    for entry in entries:
        rows.append(
            [
                format_when(entry.record.date),
                entry.vehicle_label,
                entry.record.service_type,
                truncate(entry.record.description),
            ]
        )
    return rows


def parse_record_date(date_str: Optional[str], time_str: Optional[str]) -> str:
    """Combine --date and --time; defaults are today and start of day."""
    day = date_str or date.today().isoformat()
    return f"{day}T{time_str}" if time_str else f"{day}T00:00:00"


def report(outcome) -> int:
    """Print an outcome message and return the exit code."""
    if outcome:
        print(outcome.message)
        return 0
    print(f"Error: {outcome.message}")
    return 1


# =============================================================================
# Commands
# =============================================================================


def cmd_list(garage: Garage, args) -> int:
    """List vehicles in the garage."""
    vehicles = garage.list_vehicles()
    print(f"Vehicles: {len(vehicles)} / {garage.max_capacity}")
    print()
    if not vehicles:
        print('No vehicles in the garage. Add one with "add".')
        return 0
    headers = ["ID", "Type", "Vehicle", "Color", "Status", "Records"]
    print(tabulate(make_vehicle_table(vehicles), headers=headers, tablefmt="simple"))
    return 0


def cmd_show(garage: Garage, args) -> int:
    """Show a vehicle's details, history and appointments."""
    vehicle = garage.find_vehicle(args.vehicle_id)
    if vehicle is None:
        print(f"Error: Vehicle {args.vehicle_id} not found")
        return 1

    print(vehicle.describe())
    print()

    headers = ["Date", "Service", "Cost", "Description", "Record ID"]
    past = vehicle.past_records()
    future = vehicle.future_records()

    print("HISTORY:")
    if past:
        print(tabulate(make_record_table(past), headers=headers, tablefmt="simple"))
    else:
        print("  No maintenance recorded.")
    print()

    print("SCHEDULED:")
    if future:
        # Soonest appointment first
        rows = make_record_table(list(reversed(future)))
        print(tabulate(rows, headers=headers, tablefmt="simple"))
    else:
        print("  No appointments.")
    return 0


def cmd_add(garage: Garage, args) -> int:
    """Add a vehicle."""
    variant_tag = VEHICLE_TYPES[args.type]
    fields = {
        "id": args.vehicle_id.strip().upper(),
        "brand": args.brand,
        "model": args.model,
        "year": args.year,
        "color": args.color,
        "status": args.status,
    }
    if variant_tag in ("Car", "SportsCar"):
        fields["door_count"] = args.doors
    if variant_tag == "SportsCar":
        fields["top_speed"] = args.top_speed
    if variant_tag == "Truck":
        fields["cargo_capacity"] = args.cargo
        fields["axle_count"] = args.axles

    try:
        vehicle = create_vehicle(variant_tag, **fields)
    except ValidationError as e:
        print(f"Error: {e}")
        return 1
    return report(garage.add_vehicle(vehicle))


def cmd_remove(garage: Garage, args) -> int:
    """Remove a vehicle and its history."""
    return report(garage.remove_vehicle(args.vehicle_id))


def cmd_set_status(garage: Garage, args) -> int:
    """Change a vehicle's status."""
    return report(garage.update_vehicle_status(args.vehicle_id, args.status))


def cmd_log(garage: Garage, args) -> int:
    """Add a maintenance record."""
    try:
        record = MaintenanceRecord(
            parse_record_date(args.date, args.time),
            args.service_type,
            args.cost,
            args.description,
        )
    except ValidationError as e:
        print(f"Error: {e}")
        return 1

    print(f"Adding to {args.vehicle_id}: {record.format()}")
    return report(garage.add_maintenance_to_vehicle(args.vehicle_id, record))


def cmd_unlog(garage: Garage, args) -> int:
    """Remove a maintenance record."""
    return report(garage.remove_maintenance_from_vehicle(args.vehicle_id, args.record_id))


def cmd_upcoming(garage: Garage, args) -> int:
    """Show maintenance due within the lead window."""
    upcoming = garage.upcoming_maintenance(args.days)
    if not upcoming:
        print(f"No maintenance due in the next {args.days} days.")
        return 0
    print(f"Maintenance reminders (next {args.days} days):")
    for entry in upcoming:
        print(f"  - {entry.reminder}")
    return 0


def cmd_schedule(garage: Garage, args) -> int:
    """Show every future appointment, soonest first."""
    scheduled = garage.scheduled_maintenance()
    if not scheduled:
        print("No future appointments found for vehicles in the garage.")
        return 0
    headers = ["Date", "Vehicle", "Service", "Description"]
    print(tabulate(make_upcoming_table(scheduled), headers=headers, tablefmt="simple"))
    return 0


COMMANDS = {
    "list": cmd_list,
    "show": cmd_show,
    "add": cmd_add,
    "remove": cmd_remove,
    "set-status": cmd_set_status,
    "log": cmd_log,
    "unlog": cmd_unlog,
    "upcoming": cmd_upcoming,
    "schedule": cmd_schedule,
}


# =============================================================================
# Main
# =============================================================================


def build_parser(config: Config) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Garage fleet and maintenance manager",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s list
  %(prog)s add car ABC1234 Toyota Corolla 2020 Blue --doors 4
  %(prog)s add truck XYZ9876 Volvo FH 2018 White --cargo 25 --axles 3
  %(prog)s log ABC1234 "Oil change" --date 2025-01-15 --cost 150
  %(prog)s log ABC1234 "Tire rotation" --date 2025-02-01 --time 09:30
  %(prog)s upcoming --days 14
""",
    )
    parser.add_argument("--config", type=str, help="Path to garage YAML config file")
    parser.add_argument("--store-dir", type=str, help="Directory holding saved garage data")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List vehicles in the garage")

    show_parser = subparsers.add_parser("show", help="Show vehicle details and maintenance")
    show_parser.add_argument("vehicle_id", help="Vehicle ID (e.g. plate)")

    add_parser = subparsers.add_parser("add", help="Add a vehicle")
    add_parser.add_argument("type", choices=sorted(VEHICLE_TYPES), help="Vehicle type")
    add_parser.add_argument("vehicle_id", help="Vehicle ID (e.g. plate)")
    add_parser.add_argument("brand")
    add_parser.add_argument("model")
    add_parser.add_argument("year", type=int)
    add_parser.add_argument("color")
    add_parser.add_argument("--doors", type=int, help="Door count (car, sports-car)")
    add_parser.add_argument("--top-speed", type=float, help="Top speed in km/h (sports-car)")
    add_parser.add_argument("--cargo", type=float, help="Cargo capacity in tonnes (truck)")
    add_parser.add_argument("--axles", type=int, help="Axle count (truck)")
    add_parser.add_argument("--status", default="Available", help="Status (default: Available)")

    remove_parser = subparsers.add_parser("remove", help="Remove a vehicle and its history")
    remove_parser.add_argument("vehicle_id")

    status_parser = subparsers.add_parser("set-status", help="Change a vehicle's status")
    status_parser.add_argument("vehicle_id")
    status_parser.add_argument("status", help="New status (e.g. 'In maintenance')")

    log_parser = subparsers.add_parser("log", help="Add a maintenance record")
    log_parser.add_argument("vehicle_id")
    log_parser.add_argument("service_type", help="Service type (e.g. 'Oil change')")
    log_parser.add_argument("--date", type=str, help="Date in YYYY-MM-DD format (default: today)")
    log_parser.add_argument("--time", type=str, help="Time in HH:MM format (default: start of day)")
    log_parser.add_argument("--cost", type=float, default=0.0, help="Cost of service")
    log_parser.add_argument("--description", type=str, default="", help="Notes about the service")

    unlog_parser = subparsers.add_parser("unlog", help="Remove a maintenance record")
    unlog_parser.add_argument("vehicle_id")
    unlog_parser.add_argument("record_id")

    upcoming_parser = subparsers.add_parser(
        "upcoming", help="Show maintenance due within the next few days"
    )
    upcoming_parser.add_argument(
        "--days",
        type=int,
        default=config.lead_days,
        help=f"Look-ahead window in days (default: {config.lead_days})",
    )

    subparsers.add_parser("schedule", help="Show every future appointment")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    # Config has to be known before the parser is built (--days default)
    pre = argparse.ArgumentParser(add_help=False)
    pre.add_argument("--config", type=str)
    known, _ = pre.parse_known_args(argv)
    try:
        config = load_config(known.config)
    except ValidationError as e:
        print(f"Error: {e}")
        return 1

    args = build_parser(config).parse_args(argv)
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    store = FileStore(args.store_dir or config.storage_dir)
    garage = Garage(store, max_capacity=config.max_capacity, storage_key=config.storage_key)

    load_report = garage.load()
    if load_report.error is not None or load_report.skipped:
        print(f"Warning: {load_report.message}")

    return COMMANDS[args.command](garage, args)


if __name__ == "__main__":
    sys.exit(main() or 0)
