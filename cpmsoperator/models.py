"""Resource models shared by the control plane machine set controller."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum


class StrategyType(str, Enum):
    """Update strategies a control plane machine set may request."""

    ROLLING_UPDATE = "RollingUpdate"
    RECREATE = "Recreate"
    ON_DELETE = "OnDelete"


class ConditionStatus(str, Enum):
    """Status values for a status condition."""

    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"


@dataclass
class Condition:
    """A single status condition on a resource."""

    type: str
    status: ConditionStatus
    reason: str = ""
    message: str = ""
    observed_generation: int = 0
    last_transition_time: datetime | None = None


@dataclass
class ObjectMeta:
    """Identifying metadata common to every resource."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    deletion_timestamp: datetime | None = None


@dataclass
class ClusterOperator:
    """A cluster-scoped operator status resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)


@dataclass
class Machine:
    """A machine resource."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)


@dataclass
class ControlPlaneMachineSet:
    """The resource describing the desired set of control plane machines."""

    metadata: ObjectMeta = field(default_factory=ObjectMeta)
    replicas: int | None = None
    strategy_type: StrategyType | str = StrategyType.ROLLING_UPDATE
    conditions: list[Condition] = field(default_factory=list)


@dataclass(frozen=True)
class Result:
    """Outcome of a reconcile pass, telling the caller whether to requeue."""

    requeue: bool = False
    requeue_after: timedelta = timedelta(0)


@dataclass(frozen=True)
class Request:
    """A request to reconcile the object with the given namespace and name."""

    namespace: str
    name: str


def find_status_condition(conditions: list[Condition], condition_type: str) -> Condition | None:
    """Return the condition of the given type, or None when there is none."""
    return next((c for c in conditions if c.type == condition_type), None)


def set_status_condition(conditions: list[Condition], condition: Condition) -> None:
    """Add or update a condition in place.

    The transition time changes only when the status changes; reason, message
    and observed generation are always taken from the new condition.
    """
    existing = find_status_condition(conditions, condition.type)
    if existing is None:
        added = dataclasses.replace(condition)
        if added.last_transition_time is None:
            added.last_transition_time = datetime.now(timezone.utc)
        conditions.append(added)
        return

    if existing.status != condition.status:
        existing.status = condition.status
        existing.last_transition_time = condition.last_transition_time or datetime.now(timezone.utc)

    existing.reason = condition.reason
    existing.message = condition.message
    existing.observed_generation = condition.observed_generation