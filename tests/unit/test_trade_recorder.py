"""
Unit tests for TradeRecorder.

Tests cover:
- Recording pending trades
- Terminal status transitions (completed / failed)
- Illegal transitions
- Trade history queries
- Repair of stuck pending records
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from investsim.core.exceptions import NotFoundError, ValidationError
from investsim.core.timezone import now_market
from investsim.domain.models import TradeAction, TradeStatus
from investsim.services import TradeRecorder


def record_buy(recorder: TradeRecorder, user_id: str = "user-1", symbol: str = "XYZ"):
    return recorder.record(
        user_id, symbol, TradeAction.BUY, Decimal("5"), Decimal("100"), Decimal("500")
    )


class TestRecord:
    """Tests for appending trade records."""

    def test_record_is_pending_with_generated_id(self, trade_recorder: TradeRecorder):
        trade = record_buy(trade_recorder)

        assert trade.status == TradeStatus.PENDING
        assert trade.trade_id
        assert trade.created_at is not None
        assert trade.completed_at is None
        assert trade.total_amount == Decimal("500")

    def test_cash_impact_sign(self, trade_recorder: TradeRecorder):
        buy = record_buy(trade_recorder)
        sell = trade_recorder.record(
            "user-1", "XYZ", TradeAction.SELL, Decimal("5"), Decimal("120"), Decimal("600")
        )

        assert buy.cash_impact == Decimal("-500")
        assert sell.cash_impact == Decimal("600")


class TestStatusTransitions:
    """Tests for pending -> completed | failed."""

    def test_complete_sets_status_and_timestamp(self, trade_recorder: TradeRecorder):
        trade = record_buy(trade_recorder)

        completed = trade_recorder.complete(trade.trade_id)

        assert completed.status == TradeStatus.COMPLETED
        assert completed.completed_at is not None

    def test_mark_failed(self, trade_recorder: TradeRecorder):
        trade = record_buy(trade_recorder)

        failed = trade_recorder.mark_failed(trade.trade_id)

        assert failed.status == TradeStatus.FAILED
        assert failed.status.is_terminal

    def test_terminal_status_cannot_change(self, trade_recorder: TradeRecorder):
        """
        GIVEN a completed trade
        WHEN I try to mark it failed
        THEN ValidationError is raised and it stays completed
        """
        trade = record_buy(trade_recorder)
        trade_recorder.complete(trade.trade_id)

        with pytest.raises(ValidationError) as exc_info:
            trade_recorder.mark_failed(trade.trade_id)

        assert exc_info.value.code == "ILLEGAL_STATUS_TRANSITION"
        assert trade_recorder.get_trade(trade.trade_id).status == TradeStatus.COMPLETED

    def test_complete_is_idempotent(self, trade_recorder: TradeRecorder):
        """
        GIVEN a trade already completed
        WHEN I complete it again
        THEN it is returned unchanged without an error
        """
        trade = record_buy(trade_recorder)
        first = trade_recorder.complete(trade.trade_id)

        again = trade_recorder.complete(trade.trade_id)

        assert again.status == TradeStatus.COMPLETED
        assert again.completed_at == first.completed_at

    def test_failed_trade_cannot_complete(self, trade_recorder: TradeRecorder):
        trade = record_buy(trade_recorder)
        trade_recorder.mark_failed(trade.trade_id)

        with pytest.raises(ValidationError):
            trade_recorder.complete(trade.trade_id)

    def test_unknown_trade(self, trade_recorder: TradeRecorder):
        with pytest.raises(NotFoundError):
            trade_recorder.complete("missing")


class TestHistory:
    """Tests for list_trades and reconcile_pending."""

    def test_list_trades_filters_by_user_and_action(self, trade_recorder: TradeRecorder):
        record_buy(trade_recorder, user_id="a")
        record_buy(trade_recorder, user_id="b")
        trade_recorder.record(
            "a", "CASH", TradeAction.DEPOSIT, Decimal("1"), Decimal("200"), Decimal("200")
        )

        assert len(trade_recorder.list_trades("a")) == 2
        deposits = trade_recorder.list_trades("a", action=TradeAction.DEPOSIT)
        assert [t.symbol for t in deposits] == ["CASH"]

    def test_list_trades_limit(self, trade_recorder: TradeRecorder):
        for _ in range(3):
            record_buy(trade_recorder)

        assert len(trade_recorder.list_trades("user-1", limit=2)) == 2

    def test_list_trades_date_window(self, trade_recorder: TradeRecorder):
        record_buy(trade_recorder)
        now = now_market()

        assert trade_recorder.list_trades("user-1", start=now + timedelta(days=1)) == []
        assert len(trade_recorder.list_trades("user-1", end=now + timedelta(days=1))) == 1

    def test_reconcile_pending_completes_only_pending(self, trade_recorder: TradeRecorder):
        """
        GIVEN one pending and one completed trade
        WHEN I reconcile pending records
        THEN only the pending one is completed
        """
        stuck = record_buy(trade_recorder)
        done = record_buy(trade_recorder)
        trade_recorder.complete(done.trade_id)

        repaired = trade_recorder.reconcile_pending()

        assert [t.trade_id for t in repaired] == [stuck.trade_id]
        assert trade_recorder.get_trade(stuck.trade_id).status == TradeStatus.COMPLETED

    def test_reconcile_pending_respects_cutoff(self, trade_recorder: TradeRecorder):
        record_buy(trade_recorder)

        repaired = trade_recorder.reconcile_pending(older_than=now_market() - timedelta(hours=1))

        assert repaired == []
