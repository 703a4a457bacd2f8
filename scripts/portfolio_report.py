#!/usr/bin/env python3
"""Print the portfolio dashboard, alerts and report tables for a date.

Reads a backup file (or generates a sample portfolio), then writes the
report tables as JSON files and prints the dashboard to the console.
"""

import argparse
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loan_ledger.config import LedgerConfig
from loan_ledger.exceptions import LoanLedgerError
from loan_ledger.ledger import LoanLedger
from loan_ledger.logging import setup_logging
from loan_ledger.scenarios import SamplePortfolioScenario
from loan_ledger.sinks import ConsoleSink, JsonFileSink
from loan_ledger.store import InMemoryLedgerStore


def print_dashboard(ledger: LoanLedger, as_of: date) -> None:
    """Print ranked clients, totals and alert counts."""
    summaries, totals = ledger.portfolio(as_of)
    print("=" * 60)
    print(f"  Portfolio as of {as_of.isoformat()}")
    print("=" * 60)
    for s in summaries:
        print(
            f"  {s.name:<30} {s.status.value:<7} {s.max_days_late:>4}d "
            f"{s.loan_count} loan(s)  outstanding {s.total_outstanding:>10}"
        )
    print("-" * 60)
    print(
        f"  {totals.client_count} clients, {totals.loan_count} loans, "
        f"principal {totals.total_principal}, outstanding {totals.total_outstanding}"
    )

    board = ledger.alerts(as_of)
    print(
        f"\n  Alerts: {board.badge_count} "
        f"(overdue {len(board.overdue)}, today {len(board.due_today)}, soon {len(board.due_soon)})"
    )


def main() -> None:
    """Build the report."""
    config = LedgerConfig.from_env()

    parser = argparse.ArgumentParser(description="loan-ledger portfolio report")
    parser.add_argument("--import", dest="backup", type=Path, help="Backup file to load")
    parser.add_argument("--clients", type=int, default=20, help="Sample clients when no backup is given")
    parser.add_argument("--seed", type=int, default=config.seed, help="Random seed")
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=date.today(),
        help="Reference date, YYYY-MM-DD (default: today)",
    )
    parser.add_argument("--console", action="store_true", help="Also print report tables")
    args = parser.parse_args()

    setup_logging(config.log_level, config.log_format)

    scenario = SamplePortfolioScenario(
        num_clients=0 if args.backup else args.clients,
        as_of=args.as_of,
        seed=args.seed,
        policy=config.policy,
        upcoming_window_days=config.alerts.upcoming_window_days,
    )
    if args.backup:
        scenario.store = InMemoryLedgerStore()
        try:
            result = LoanLedger(scenario.store, config).import_backup(args.backup)
        except LoanLedgerError as e:
            print(f"Could not import {args.backup}: {e}", file=sys.stderr)
            sys.exit(1)
        print(
            f"Imported {result.clients_created} clients "
            f"({result.clients_matched} matched) and {result.loans_inserted} loans"
        )
    else:
        scenario.generate()

    print_dashboard(LoanLedger(scenario.store, config), args.as_of)

    sinks = [JsonFileSink(config.output.output_dir, pretty=config.output.pretty_json)]
    if args.console:
        sinks.append(ConsoleSink(max_records=10))
    scenario.export(sinks)
    for sink in sinks:
        sink.close()


if __name__ == "__main__":
    main()
