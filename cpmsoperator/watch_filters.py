"""Event filters and mappings for the resources the controller watches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from cpmsoperator.models import ClusterOperator, ControlPlaneMachineSet, Machine, Request

CLUSTER_CONTROL_PLANE_MACHINE_SET_NAME = "cluster"

MACHINE_ROLE_LABEL_NAME = "machine.openshift.io/cluster-api-machine-role"
MACHINE_TYPE_LABEL_NAME = "machine.openshift.io/cluster-api-machine-type"
MACHINE_MASTER_ROLE_LABEL_NAME = "master"
MACHINE_MASTER_TYPE_LABEL_NAME = "master"


@dataclass
class CreateEvent:
    """An object was created."""

    obj: Any


@dataclass
class UpdateEvent:
    """An object was updated."""

    obj_old: Any = None
    obj_new: Any = None


@dataclass
class DeleteEvent:
    """An object was deleted."""

    obj: Any
    delete_state_unknown: bool = False


@dataclass
class GenericEvent:
    """An event from an external source."""

    obj: Any


@dataclass(frozen=True)
class Predicate:
    """Applies one object check to every kind of event."""

    matches: Callable[[Any], bool]

    def create(self, event: CreateEvent) -> bool:
        return self.matches(event.obj)

    def update(self, event: UpdateEvent) -> bool:
        return self.matches(event.obj_new)

    def delete(self, event: DeleteEvent) -> bool:
        return self.matches(event.obj)

    def generic(self, event: GenericEvent) -> bool:
        return self.matches(event.obj)


def cluster_operator_to_control_plane_machine_set(namespace: str) -> Callable[[Any], list[Request]]:
    """Map any cluster operator to the singleton machine set in the namespace."""

    def mapper(_obj: Any) -> list[Request]:
        return [Request(namespace=namespace, name=CLUSTER_CONTROL_PLANE_MACHINE_SET_NAME)]

    return mapper


def filter_cluster_operator(name: str) -> Predicate:
    """Accept only the cluster operator with the given name."""

    def matches(obj: Any) -> bool:
        if not isinstance(obj, ClusterOperator):
            raise TypeError("expected to get an of object of type configv1.ClusterOperator")
        return obj.metadata.name == name

    return Predicate(matches)


def filter_control_plane_machine_set(namespace: str) -> Predicate:
    """Accept only the singleton control plane machine set in the namespace."""

    def matches(obj: Any) -> bool:
        if not isinstance(obj, ControlPlaneMachineSet):
            raise TypeError("expected to get an of object of type machinev1.ControlPlaneMachineSet")
        return (
            obj.metadata.namespace == namespace
            and obj.metadata.name == CLUSTER_CONTROL_PLANE_MACHINE_SET_NAME
        )

    return Predicate(matches)


def filter_control_plane_machines(namespace: str) -> Predicate:
    """Accept only machines in the namespace labelled as control plane machines."""

    def matches(obj: Any) -> bool:
        if not isinstance(obj, Machine):
            raise TypeError("expected to get an of object of type machinev1beta1.Machine")
        if obj.metadata.namespace != namespace:
            return False
        labels = obj.metadata.labels
        return (
            labels.get(MACHINE_ROLE_LABEL_NAME) == MACHINE_MASTER_ROLE_LABEL_NAME
            and labels.get(MACHINE_TYPE_LABEL_NAME) == MACHINE_MASTER_TYPE_LABEL_NAME
        )

    return Predicate(matches)