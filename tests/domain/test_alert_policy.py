"""Unit tests for the alert condition checks and AlertPolicy."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from app.crypto_alerts.domain.entities.alert import Alert, Operator
from app.crypto_alerts.domain.entities.entry import Entry
from app.crypto_alerts.domain.services.alert_policy import AlertPolicy, condition_holds

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
T = Decimal("40000")


@pytest.fixture
def policy() -> AlertPolicy:
    """Create an AlertPolicy instance for testing."""
    return AlertPolicy()


def make_alert(operator: Operator = Operator.HIGHER, **overrides) -> Alert:
    fields = {
        "id": "a1",
        "symbol": "BTC",
        "operator": operator,
        "threshold": T,
    }
    fields.update(overrides)
    return Alert(**fields)


def make_entry(previous, current) -> Entry:
    entry = Entry(symbol="BTC", name="Bitcoin", url="u", logo="l")
    entry.previous_quote = Decimal(previous) if previous is not None else None
    entry.current_quote = Decimal(current) if current is not None else None
    return entry


class TestConditionHolds:
    """Tests for the per-operator transition checks."""

    @pytest.mark.parametrize(
        "previous,current,expected",
        [
            (None, "41000", True),
            ("39000", "41500", True),
            ("40000", "40001", True),
            ("41500", "41800", False),
            ("39000", "40000", False),
            (None, "39000", False),
        ],
    )
    def test_higher(self, previous, current, expected) -> None:
        prev = Decimal(previous) if previous is not None else None
        assert condition_holds(Operator.HIGHER, prev, Decimal(current), T) is expected

    @pytest.mark.parametrize(
        "previous,current,expected",
        [
            (None, "39000", True),
            ("41000", "39000", True),
            ("40000", "39999", True),
            ("39000", "38000", False),
            ("41000", "40000", False),
        ],
    )
    def test_lower(self, previous, current, expected) -> None:
        prev = Decimal(previous) if previous is not None else None
        assert condition_holds(Operator.LOWER, prev, Decimal(current), T) is expected

    @pytest.mark.parametrize(
        "previous,current,expected",
        [
            (None, "41000", False),
            (None, "39000", False),
            ("39000", "41000", True),
            ("41000", "39000", True),
            ("40000", "40001", True),
            ("40000", "39999", True),
            ("41000", "42000", False),
            ("40000", "40000", False),
        ],
    )
    def test_cross(self, previous, current, expected) -> None:
        prev = Decimal(previous) if previous is not None else None
        assert condition_holds(Operator.CROSS, prev, Decimal(current), T) is expected


class TestAlertPolicy:
    """Tests for AlertPolicy.should_trigger."""

    def test_triggers_on_upward_move(self, policy: AlertPolicy) -> None:
        assert policy.should_trigger(make_alert(), make_entry("39000", "41500"), NOW) is True

    def test_no_trigger_without_current_quote(self, policy: AlertPolicy) -> None:
        assert policy.should_trigger(make_alert(), make_entry(None, None), NOW) is False

    def test_no_trigger_when_expired(self, policy: AlertPolicy) -> None:
        alert = make_alert(expiration=NOW - timedelta(seconds=1))

        assert policy.is_pending(alert, NOW) is False
        assert policy.should_trigger(alert, make_entry("39000", "41500"), NOW) is False

    def test_expiration_equal_to_now_is_still_pending(self, policy: AlertPolicy) -> None:
        alert = make_alert(expiration=NOW)

        assert policy.should_trigger(alert, make_entry("39000", "41500"), NOW) is True

    def test_no_trigger_when_already_activated(self, policy: AlertPolicy) -> None:
        alert = make_alert(activation=NOW - timedelta(minutes=5))

        assert policy.is_pending(alert, NOW) is False
        assert policy.should_trigger(alert, make_entry("39000", "41500"), NOW) is False
