"""Handling of machine updates according to the machine set's update strategy."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from cpmsoperator.models import (
    Condition,
    ConditionStatus,
    ControlPlaneMachineSet,
    Result,
    StrategyType,
    set_status_condition,
)

CONDITION_DEGRADED = "Degraded"
REASON_INVALID_STRATEGY = "InvalidStrategy"

CREATED_REPLACEMENT = "Created replacement machine"
ERROR_CREATING_MACHINE = "Error creating machine"
ERROR_DELETING_MACHINE = "Error deleting machine"
INVALID_STRATEGY_MESSAGE = "invalid value for spec.strategy.type"
MACHINE_REQUIRES_UPDATE = "Machine requires an update, delete the machine to trigger a replacement"
NO_UPDATES_REQUIRED = "No updates required"
REMOVING_OLD_MACHINE = "Removing old machine"
WAITING_FOR_READY = "Waiting for machine to become ready"
WAITING_FOR_REMOVED = "Waiting for machine to be removed"
WAITING_FOR_REPLACEMENT = "Waiting for replacement machine to become ready"


class UnknownStrategyError(ValueError):
    """The update strategy is not one that is recognised."""

    def __init__(self, strategy: Any) -> None:
        self.strategy = strategy
        super().__init__(f"unknown update strategy: {strategy}")


class _StrategyNotSupportedError(ValueError):
    def __init__(self, strategy: StrategyType) -> None:
        self.strategy = strategy
        super().__init__(f'update strategy "{strategy.value}" is not supported')


_RECREATE_NOT_SUPPORTED = _StrategyNotSupportedError(StrategyType.RECREATE)


@dataclass
class ControlPlaneMachineSetReconciler:
    """Reconciles the control plane machine set in one namespace."""

    namespace: str = ""

    def reconcile_machine_updates(
        self,
        logger: logging.Logger,
        cpms: ControlPlaneMachineSet,
        machine_provider: Any,
        machine_infos: Mapping[int, Sequence[Any]],
    ) -> Result:
        """Dispatch to the update strategy of the machine set.

        An invalid strategy marks the machine set degraded and is logged; it is
        not raised, since only the user can resolve it.
        """
        strategy = cpms.strategy_type
        if strategy == StrategyType.ROLLING_UPDATE:
            return self.reconcile_machine_rolling_update(logger, cpms, machine_provider, machine_infos)
        if strategy == StrategyType.ON_DELETE:
            return self.reconcile_machine_on_delete_update(logger, cpms, machine_provider, machine_infos)

        error: ValueError
        if strategy == StrategyType.RECREATE:
            error = _RECREATE_NOT_SUPPORTED
        else:
            error = UnknownStrategyError(strategy)

        set_status_condition(
            cpms.conditions,
            Condition(
                type=CONDITION_DEGRADED,
                status=ConditionStatus.TRUE,
                reason=REASON_INVALID_STRATEGY,
                message=f"{INVALID_STRATEGY_MESSAGE}: {error}",
            ),
        )
        logger.error(INVALID_STRATEGY_MESSAGE, extra={"error": error})
        return Result()

    def reconcile_machine_rolling_update(
        self,
        logger: logging.Logger,
        cpms: ControlPlaneMachineSet,
        machine_provider: Any,
        indexed_machine_infos: Mapping[int, Sequence[Any]],
    ) -> Result:
        """Apply the rolling update strategy.

        Rollouts are not performed yet: no machines are created or deleted and
        the machine set is left unchanged.
        """
        return Result()

    def reconcile_machine_on_delete_update(
        self,
        logger: logging.Logger,
        cpms: ControlPlaneMachineSet,
        machine_provider: Any,
        indexed_machine_infos: Mapping[int, Sequence[Any]],
    ) -> Result:
        """Apply the on-delete update strategy.

        Replacements are not created yet: no machines are created or deleted
        and the machine set is left unchanged.
        """
        return Result()