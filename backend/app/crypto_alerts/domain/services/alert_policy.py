"""Alert policy domain service for alert trigger evaluation.

Each operator is a transition check on the previous/current quote pair:
- higher: fires when the price moves above the threshold
- lower: fires when the price moves below the threshold
- cross: fires when the price moves to the other side of the threshold

A missing previous quote counts as "condition previously false" for higher and
lower, so the very first observation may fire them. Cross needs a real prior
sample. Threshold equality counts as already being on that side (<= / >=).
"""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from app.crypto_alerts.domain.entities.alert import Alert, AlertState, Operator
from app.crypto_alerts.domain.entities.entry import Entry

ConditionCheck = Callable[[Optional[Decimal], Decimal, Decimal], bool]


def _higher(previous: Optional[Decimal], current: Decimal, threshold: Decimal) -> bool:
    return current > threshold and (previous is None or previous <= threshold)


def _lower(previous: Optional[Decimal], current: Decimal, threshold: Decimal) -> bool:
    return current < threshold and (previous is None or previous >= threshold)


def _cross(previous: Optional[Decimal], current: Decimal, threshold: Decimal) -> bool:
    if previous is None:
        return False
    return (previous <= threshold and current > threshold) or (
        previous >= threshold and current < threshold
    )


OPERATOR_CHECKS: dict[Operator, ConditionCheck] = {
    Operator.HIGHER: _higher,
    Operator.LOWER: _lower,
    Operator.CROSS: _cross,
}


def condition_holds(
    operator: Operator,
    previous: Optional[Decimal],
    current: Decimal,
    threshold: Decimal,
) -> bool:
    """Decide whether an operator's condition holds for one quote transition.

    Args:
        operator: Condition kind.
        previous: Quote before the latest refresh, None if never observed.
        current: Latest quote.
        threshold: Price level to compare against.

    Returns:
        True if the transition satisfies the condition.
    """
    return OPERATOR_CHECKS[operator](previous, current, threshold)


class AlertPolicy:
    """Domain service for evaluating alert trigger conditions.

    This service implements pure domain logic with no infrastructure dependencies.
    An alert is only considered while pending (never activated, not expired), and
    it fires when its operator's transition check holds on the entry's quote pair.
    """

    def is_pending(self, alert: Alert, now: datetime) -> bool:
        """Check whether an alert is still eligible for evaluation.

        Args:
            alert: The alert to inspect.
            now: Evaluation moment.

        Returns:
            True if the alert is neither activated nor expired.
        """
        return alert.state(now) is AlertState.PENDING

    def should_trigger(self, alert: Alert, entry: Entry, now: datetime) -> bool:
        """Determine if an alert fires on the entry's latest quote transition.

        Rules:
        1. Alert must be pending (not activated, not expired at ``now``)
        2. Entry must carry a current quote
        3. The operator's transition check must hold

        Args:
            alert: The alert configuration to evaluate.
            entry: The refreshed entry for the alert's symbol.
            now: Evaluation moment.

        Returns:
            True if the alert should activate, False otherwise.
        """
        if not self.is_pending(alert, now):
            return False

        if not entry.is_quoted:
            return False

        return condition_holds(
            alert.operator,
            entry.previous_quote,
            entry.current_quote,
            alert.threshold,
        )
