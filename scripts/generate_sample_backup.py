#!/usr/bin/env python3
"""Generate a sample portfolio and write it as a backup file.

The backup can be merged into another ledger with ``portfolio_report.py
--import``.
"""

import argparse
import sys
from datetime import date
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from loan_ledger.config import LedgerConfig
from loan_ledger.ledger import LoanLedger
from loan_ledger.logging import setup_logging
from loan_ledger.scenarios import SamplePortfolioScenario


def main() -> None:
    """Generate the sample backup."""
    config = LedgerConfig.from_env()

    parser = argparse.ArgumentParser(description="Generate a sample loan-ledger backup")
    parser.add_argument("--clients", type=int, default=20, help="Number of clients (default: 20)")
    parser.add_argument("--seed", type=int, default=config.seed, help="Random seed")
    parser.add_argument(
        "--as-of",
        type=date.fromisoformat,
        default=date.today(),
        help="Reference date, YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=config.output.output_dir / "backup.json",
        help="Backup file to write",
    )
    args = parser.parse_args()

    setup_logging(config.log_level, config.log_format)

    scenario = SamplePortfolioScenario(
        num_clients=args.clients,
        as_of=args.as_of,
        seed=args.seed,
        policy=config.policy,
    )
    store = scenario.generate()

    document = LoanLedger(store, config).export_backup(args.output)
    print(f"Wrote {document['totalClients']} clients and {document['totalLoans']} loans to {args.output}")


if __name__ == "__main__":
    main()
