"""Domain services implementing core business rules.

These are pure domain services with no infrastructure dependencies:
- AlertPolicy / condition_holds: operator transition checks and alert eligibility
"""

from app.crypto_alerts.domain.services.alert_policy import AlertPolicy, condition_holds

__all__ = [
    "AlertPolicy",
    "condition_holds",
]
