import copy
import logging

import pytest

from cpmsoperator.models import ConditionStatus, ControlPlaneMachineSet, ObjectMeta, Result, StrategyType
from cpmsoperator.updates import (
    CONDITION_DEGRADED,
    INVALID_STRATEGY_MESSAGE,
    REASON_INVALID_STRATEGY,
    ControlPlaneMachineSetReconciler,
    UnknownStrategyError,
)

LOGGER_NAME = "cpms-test"


class RecordingProvider:
    def __init__(self):
        self.calls = []

    def create_machine(self, *args):
        self.calls.append(("create", args))

    def delete_machine(self, *args):
        self.calls.append(("delete", args))


def _cpms(strategy):
    return ControlPlaneMachineSet(ObjectMeta(name="cluster", namespace="test"), replicas=3, strategy_type=strategy)


def _run(strategy, caplog):
    reconciler = ControlPlaneMachineSetReconciler(namespace="test")
    cpms = _cpms(strategy)
    provider = RecordingProvider()
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        result = reconciler.reconcile_machine_updates(logging.getLogger(LOGGER_NAME), cpms, provider, {})
    return result, cpms, provider


@pytest.mark.parametrize("strategy", [StrategyType.ROLLING_UPDATE, StrategyType.ON_DELETE])
def test_valid_strategies_leave_machine_set_unchanged(strategy, caplog):
    reconciler = ControlPlaneMachineSetReconciler(namespace="test")
    cpms = _cpms(strategy)
    original = copy.deepcopy(cpms)
    provider = RecordingProvider()
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        result = reconciler.reconcile_machine_updates(
            logging.getLogger(LOGGER_NAME), cpms, provider, {0: [], 1: [], 2: []}
        )
    assert result == Result()
    assert cpms == original
    assert provider.calls == []
    assert caplog.records == []


def test_recreate_returns_empty_result(caplog):
    result, _, provider = _run(StrategyType.RECREATE, caplog)
    assert result == Result()
    assert provider.calls == []


def test_recreate_logs_invalid_strategy(caplog):
    _run(StrategyType.RECREATE, caplog)
    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.levelno == logging.ERROR
    assert record.getMessage() == INVALID_STRATEGY_MESSAGE
    assert str(record.error) == 'update strategy "Recreate" is not supported'


def test_recreate_sets_degraded_condition(caplog):
    _, cpms, _ = _run(StrategyType.RECREATE, caplog)
    assert len(cpms.conditions) == 1
    condition = cpms.conditions[0]
    assert condition.type == CONDITION_DEGRADED
    assert condition.status is ConditionStatus.TRUE
    assert condition.reason == REASON_INVALID_STRATEGY
    assert condition.message == 'invalid value for spec.strategy.type: update strategy "Recreate" is not supported'


def test_invalid_returns_empty_result(caplog):
    result, _, provider = _run("invalid", caplog)
    assert result == Result()
    assert provider.calls == []


def test_invalid_logs_unknown_strategy(caplog):
    _run("invalid", caplog)
    assert len(caplog.records) == 1
    record = caplog.records[0]
    assert record.getMessage() == INVALID_STRATEGY_MESSAGE
    assert isinstance(record.error, UnknownStrategyError)
    assert record.error.strategy == "invalid"
    assert str(record.error) == "unknown update strategy: invalid"


def test_invalid_sets_degraded_condition(caplog):
    _, cpms, _ = _run("invalid", caplog)
    assert len(cpms.conditions) == 1
    condition = cpms.conditions[0]
    assert condition.type == CONDITION_DEGRADED
    assert condition.status is ConditionStatus.TRUE
    assert condition.reason == REASON_INVALID_STRATEGY
    assert condition.message == "invalid value for spec.strategy.type: unknown update strategy: invalid"


def test_repeated_invalid_reconcile_keeps_single_condition(caplog):
    reconciler = ControlPlaneMachineSetReconciler(namespace="test")
    cpms = _cpms("invalid")
    logger = logging.getLogger(LOGGER_NAME)
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        reconciler.reconcile_machine_updates(logger, cpms, RecordingProvider(), {})
        first_time = cpms.conditions[0].last_transition_time
        reconciler.reconcile_machine_updates(logger, cpms, RecordingProvider(), {})
    assert len(cpms.conditions) == 1
    assert cpms.conditions[0].last_transition_time == first_time
    assert len(caplog.records) == 2