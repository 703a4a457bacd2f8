"""Payment reminder text for one open installment.

The lender sends it to the client through whatever channel they use;
building the text is all this module does.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from loan_ledger.backup.reconcile import phone_key
from loan_ledger.config import InterestPolicy
from loan_ledger.engine.accrual import DEFAULT_POLICY, breakdown
from loan_ledger.engine.money import ZERO, round_money
from loan_ledger.exceptions import InvalidPaymentError
from loan_ledger.models import Client, Installment, InstallmentStatus

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class PaymentReminder:
    """Message addressed to a phone in international digits-only form."""

    phone: str
    message: str


def format_brl(value: Decimal) -> str:
    """Format an amount as Brazilian reais, e.g. ``R$ 1.234,50``."""
    text = f"{round_money(value):,.2f}"
    return "R$ " + text.replace(",", "_").replace(".", ",").replace("_", ".")


def _format_rate(rate: Decimal) -> str:
    return format((rate * HUNDRED).normalize(), "f").replace(".", ",")


def reminder_message(
    client: Client,
    installment: Installment,
    as_of: date,
    policy: InterestPolicy | None = None,
) -> str:
    """Build the reminder text for ``installment`` as of ``as_of``.

    The amount quoted already includes late interest. The delay line only
    appears for late installments and the paid/balance lines only once
    something was paid.

    Raises
    ------
    InvalidPaymentError
        If the installment is already settled.
    """
    policy = policy or DEFAULT_POLICY
    row = breakdown(installment, as_of, policy)
    if row.status == InstallmentStatus.PAID:
        raise InvalidPaymentError(f"Installment {installment.number} is already paid")

    lines = [
        f"Prezado(a), {client.name}!",
        "Informo que, conforme estipulado, os pagamentos realizados após o "
        f"vencimento terão acréscimo de {_format_rate(policy.daily_late_rate)}% "
        "de juros ao dia sobre o valor em aberto, até a quitação.",
        "",
        f"📋 *Parcela {row.number}*",
        f"💰 Valor: {format_brl(row.total_due)}",
        f"📅 Vencimento: {row.due_date:%d/%m/%Y}",
    ]
    if row.days_late > 0:
        lines.append(f"⚠️ Atraso: {row.days_late} dias")
    if row.amount_paid > ZERO:
        lines.append(f"✅ Já Pago: {format_brl(row.amount_paid)}")
        lines.append(f"💳 Saldo: {format_brl(row.outstanding_balance)}")
    return "\n".join(lines)


def payment_reminder(
    client: Client,
    installment: Installment,
    as_of: date,
    policy: InterestPolicy | None = None,
    country_code: str = "55",
) -> PaymentReminder:
    """Address ``reminder_message`` to the client's phone.

    The phone keeps only its digits and is prefixed with ``country_code``.
    """
    return PaymentReminder(
        phone=country_code + phone_key(client.phone),
        message=reminder_message(client, installment, as_of, policy),
    )
