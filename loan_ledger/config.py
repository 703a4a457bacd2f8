"""Configuration management for loan-ledger."""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any

from loan_ledger.exceptions import ConfigurationError, InvalidScheduleError
from loan_ledger.logging import LOG_FORMATS


def _default_rate_table() -> dict[int, Decimal]:
    # 1x: 30% on the whole amount, 2x and above: 60% on each installment
    return {1: Decimal("0.30"), 2: Decimal("0.60")}


@dataclass
class InterestPolicy:
    """Contract and late-interest rules applied to every loan."""

    rate_table: dict[int, Decimal] = field(default_factory=_default_rate_table)
    daily_late_rate: Decimal = Decimal("0.01")
    installment_spacing_days: int = 30

    def contract_rate(self, installment_count: int) -> Decimal:
        """Return the flat contract rate for a schedule of ``installment_count``.

        Counts beyond the largest tier fall back to the highest tier whose
        key does not exceed the count.
        """
        if installment_count < 1:
            raise InvalidScheduleError(
                f"Installment count must be at least 1, got {installment_count}"
            )
        tiers = [count for count in self.rate_table if count <= installment_count]
        if not tiers:
            raise InvalidScheduleError(
                f"No contract rate configured for {installment_count} installments"
            )
        return self.rate_table[max(tiers)]


@dataclass
class AlertConfig:
    """Due-date alerting windows."""

    warn_window_days: int = 3
    upcoming_window_days: int = 7


@dataclass
class OutputConfig:
    """Output configuration."""

    output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class LedgerConfig:
    """Main configuration for loan-ledger."""

    policy: InterestPolicy = field(default_factory=InterestPolicy)
    alerts: AlertConfig = field(default_factory=AlertConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    seed: int | None = None
    log_level: str = "INFO"
    log_format: str = "standard"

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from ``LOAN_LEDGER_*`` environment variables."""
        import json
        import os

        def env(name: str, default: str | None = None) -> str | None:
            return os.getenv(f"LOAN_LEDGER_{name}", default)

        try:
            rate_table_str = env("RATE_TABLE")
            if rate_table_str:
                rate_table = {
                    int(count): Decimal(str(rate))
                    for count, rate in json.loads(rate_table_str).items()
                }
            else:
                rate_table = _default_rate_table()

            policy = InterestPolicy(
                rate_table=rate_table,
                daily_late_rate=Decimal(env("DAILY_LATE_RATE", "0.01")),
                installment_spacing_days=int(env("INSTALLMENT_SPACING_DAYS", "30")),
            )

            alerts = AlertConfig(
                warn_window_days=int(env("WARN_WINDOW_DAYS", "3")),
                upcoming_window_days=int(env("UPCOMING_WINDOW_DAYS", "7")),
            )

            seed = env("SEED")
            config = cls(
                policy=policy,
                alerts=alerts,
                output=OutputConfig(
                    output_dir=Path(env("OUTPUT_DIR", "output")),
                    pretty_json=env("PRETTY_JSON", "false").lower() == "true",
                ),
                seed=int(seed) if seed else None,
                log_level=env("LOG_LEVEL", "INFO"),
                log_format=env("LOG_FORMAT", "standard").lower(),
            )
        except (ValueError, InvalidOperation, AttributeError) as e:
            raise ConfigurationError(f"Invalid loan-ledger environment: {e}") from e

        if not policy.rate_table or 1 not in policy.rate_table:
            raise ConfigurationError("Rate table must define a tier for 1 installment")
        if policy.installment_spacing_days < 1:
            raise ConfigurationError("Installment spacing must be at least one day")
        if config.log_format not in LOG_FORMATS:
            raise ConfigurationError(
                f"Log format must be one of {', '.join(LOG_FORMATS)}, "
                f"got {config.log_format!r}"
            )

        return config

    def to_dict(self) -> dict[str, Any]:
        """Return a flat, printable view of the configuration."""
        return {
            "rate_table": {str(k): str(v) for k, v in self.policy.rate_table.items()},
            "daily_late_rate": str(self.policy.daily_late_rate),
            "installment_spacing_days": self.policy.installment_spacing_days,
            "warn_window_days": self.alerts.warn_window_days,
            "upcoming_window_days": self.alerts.upcoming_window_days,
            "output_dir": str(self.output.output_dir),
            "pretty_json": self.output.pretty_json,
            "seed": self.seed,
            "log_level": self.log_level,
            "log_format": self.log_format,
        }
