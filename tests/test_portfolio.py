"""Tests for portfolio aggregation."""

from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest
from conftest import make_client, make_loan

from loan_ledger.engine import (
    filter_summaries,
    portfolio_totals,
    settle_installment,
    summarize_client,
    summarize_portfolio,
)
from loan_ledger.models import Client, ClientStatus, Loan

AS_OF = date(2024, 2, 10)


def _settled(loan: Loan) -> Loan:
    return replace(
        loan, installments=[settle_installment(inst, AS_OF) for inst in loan.installments]
    )


@pytest.fixture
def portfolio() -> tuple[list[Client], dict[str, list[Loan]]]:
    """Five clients: 10 days late, 5 days late, settled, no loans, on time."""
    clients = [
        make_client("c-ontime", "11 90000-0005"),
        make_client("c-late5", "11 90000-0002"),
        make_client("c-paid", "11 90000-0003"),
        make_client("c-none", "11 90000-0004"),
        make_client("c-late10", "11 90000-0001"),
    ]
    loans = {
        "c-late10": [make_loan("l-1", "c-late10", "1000", 1, date(2024, 1, 1))],
        "c-late5": [make_loan("l-2", "c-late5", "1000", 1, date(2024, 1, 6))],
        "c-paid": [_settled(make_loan("l-3", "c-paid", "500", 1, date(2024, 1, 20)))],
        "c-ontime": [make_loan("l-4", "c-ontime", "2000", 2, date(2024, 2, 1))],
    }
    return clients, loans


class TestSummarizeClient:
    """Tests for summarize_client."""

    def test_aggregates_active_loans(self) -> None:
        client = make_client("c-1", "11 90000-0001")
        loans = [
            make_loan("l-1", "c-1", "1000", 1, date(2024, 1, 1)),
            make_loan("l-2", "c-1", "500", 2, date(2024, 2, 1)),
        ]
        summary = summarize_client(client, loans, AS_OF)

        assert summary is not None
        assert summary.loan_count == 2
        assert summary.total_principal == Decimal("1500.00")
        # 1300 + 130 late interest, plus 2 x 400
        assert summary.total_outstanding == Decimal("2230.00")
        assert summary.max_days_late == 10
        assert summary.status == ClientStatus.LATE

    def test_excludes_paid_loans(self) -> None:
        client = make_client("c-1", "11 90000-0001")
        loans = [
            _settled(make_loan("l-1", "c-1", "1000", 1, date(2024, 1, 20))),
            make_loan("l-2", "c-1", "500", 1, date(2024, 2, 1)),
        ]
        summary = summarize_client(client, loans, AS_OF)

        assert summary.loan_count == 1
        assert summary.total_principal == Decimal("500.00")
        assert summary.status == ClientStatus.ACTIVE

    def test_all_paid_returns_none(self) -> None:
        client = make_client("c-1", "11 90000-0001")
        loans = [_settled(make_loan("l-1", "c-1", "1000", 1, date(2024, 1, 20)))]

        assert summarize_client(client, loans, AS_OF) is None

    def test_no_loans_returns_none(self) -> None:
        assert summarize_client(make_client("c-1", "11 90000-0001"), [], AS_OF) is None


class TestSummarizePortfolio:
    """Tests for summarize_portfolio."""

    def test_ranking_by_delay(self, portfolio) -> None:
        clients, loans = portfolio
        summaries = summarize_portfolio(clients, loans, AS_OF)

        assert [s.client_id for s in summaries] == ["c-late10", "c-late5", "c-ontime"]
        assert [s.max_days_late for s in summaries] == [10, 5, 0]

    def test_paid_and_loanless_clients_excluded(self, portfolio) -> None:
        clients, loans = portfolio
        ids = {s.client_id for s in summarize_portfolio(clients, loans, AS_OF)}

        assert "c-paid" not in ids
        assert "c-none" not in ids

    def test_tie_broken_by_outstanding(self) -> None:
        clients = [make_client("a", "1"), make_client("b", "2")]
        loans = {
            "a": [make_loan("l-a", "a", "500", 1, date(2024, 2, 1))],
            "b": [make_loan("l-b", "b", "900", 1, date(2024, 2, 1))],
        }
        summaries = summarize_portfolio(clients, loans, AS_OF)

        assert [s.client_id for s in summaries] == ["b", "a"]

    def test_full_tie_is_deterministic(self) -> None:
        clients = [make_client("z", "1"), make_client("m", "2"), make_client("a", "3")]
        loans = {
            cid: [make_loan(f"l-{cid}", cid, "500", 1, date(2024, 2, 1))]
            for cid in ("z", "m", "a")
        }

        first = [s.client_id for s in summarize_portfolio(clients, loans, AS_OF)]
        second = [s.client_id for s in summarize_portfolio(reversed(clients), loans, AS_OF)]

        assert first == ["a", "m", "z"]
        assert first == second

    def test_empty_portfolio(self) -> None:
        assert summarize_portfolio([], {}, AS_OF) == []


class TestFilterAndTotals:
    """Tests for filter_summaries and portfolio_totals."""

    def test_filter_late(self, portfolio) -> None:
        clients, loans = portfolio
        summaries = summarize_portfolio(clients, loans, AS_OF)
        late = filter_summaries(summaries, ClientStatus.LATE)

        assert [s.client_id for s in late] == ["c-late10", "c-late5"]

    def test_filter_accepts_string(self, portfolio) -> None:
        clients, loans = portfolio
        summaries = summarize_portfolio(clients, loans, AS_OF)

        assert [s.client_id for s in filter_summaries(summaries, "active")] == ["c-ontime"]

    def test_filter_none_keeps_all(self, portfolio) -> None:
        clients, loans = portfolio
        summaries = summarize_portfolio(clients, loans, AS_OF)

        assert filter_summaries(summaries) == summaries

    def test_filter_unknown_status(self, portfolio) -> None:
        clients, loans = portfolio
        summaries = summarize_portfolio(clients, loans, AS_OF)

        with pytest.raises(ValueError):
            filter_summaries(summaries, "paid")

    def test_totals(self, portfolio) -> None:
        clients, loans = portfolio
        totals = portfolio_totals(summarize_portfolio(clients, loans, AS_OF))

        assert totals.client_count == 3
        assert totals.loan_count == 3
        assert totals.total_principal == Decimal("4000.00")
        # 1430 + 1365 + 2 x 1600
        assert totals.total_outstanding == Decimal("5995.00")

    def test_totals_follow_filter(self, portfolio) -> None:
        clients, loans = portfolio
        summaries = summarize_portfolio(clients, loans, AS_OF)
        totals = portfolio_totals(filter_summaries(summaries, ClientStatus.LATE))

        assert totals.client_count == 2
        assert totals.total_principal == Decimal("2000.00")
        assert totals.total_outstanding == Decimal("2795.00")

    def test_totals_of_nothing(self) -> None:
        totals = portfolio_totals([])

        assert totals.client_count == 0
        assert totals.total_outstanding == Decimal("0.00")
