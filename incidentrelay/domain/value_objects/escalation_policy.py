"""
Escalation Policy Value Object

Architectural Intent:
- Closed set of escalation policies an incident can be routed to
- Each policy maps to exactly one PagerDuty escalation policy id
- Lookup table is read-only after import

Design Decisions:
- Enum keyed table so every member has an id (checked at import time)
- from_name() accepts CLI spellings (EVERYONE, everyone, just-ivan)
"""

from __future__ import annotations
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class EscalationPolicy(Enum):
    EVERYONE = "everyone"
    JUST_IVAN = "just_ivan"
    JUST_RICHARD = "just_richard"

    @classmethod
    def from_name(cls, name: str) -> EscalationPolicy:
        normalized = name.strip().lower().replace("-", "_")
        for policy in cls:
            if policy.value == normalized:
                return policy
        valid = ", ".join(p.value for p in cls)
        raise ValueError(f"Unknown escalation policy '{name}' (expected one of: {valid})")


ESCALATION_POLICIES: Mapping[EscalationPolicy, str] = MappingProxyType(
    {
        EscalationPolicy.EVERYONE: "P6SUJ1N",
        EscalationPolicy.JUST_IVAN: "P3PE907",
        EscalationPolicy.JUST_RICHARD: "P88YCS9",
    }
)

_missing = set(EscalationPolicy) - set(ESCALATION_POLICIES)
if _missing:
    raise RuntimeError(f"Escalation policies without a provider id: {_missing}")


def get_policy_id(policy: EscalationPolicy) -> str:
    """Return the PagerDuty escalation policy id for a policy."""
    return ESCALATION_POLICIES[policy]
