# cpmsoperator

Building blocks for a controller that manages a cluster's control plane
machines as one set. The package has no dependencies outside the standard
library.

## Modules

### `cpmsoperator.models`

Plain dataclasses for the resources the controller works with:

- `ObjectMeta` (name, namespace, labels, deletion timestamp), used as the
  `metadata` of `ClusterOperator`, `Machine` and `ControlPlaneMachineSet`.
- `ControlPlaneMachineSet` also carries `replicas`, `strategy_type`
  (a `StrategyType`: `ROLLING_UPDATE`, `RECREATE` or `ON_DELETE`) and a list of
  status `conditions`.
- `Condition`, with a `ConditionStatus` of `TRUE`, `FALSE` or `UNKNOWN`.
- `Result`, the outcome of a reconcile step (`requeue`, `requeue_after`), and
  `Request`, a namespace and name to reconcile.

`find_status_condition(conditions, condition_type)` returns the condition of
that type, or `None`. `set_status_condition(conditions, condition)` adds the
condition, or updates the existing one in place: reason, message and observed
generation are always replaced, while the transition time changes only when
the status does.

### `cpmsoperator.watch_filters`

A `Predicate` applies one check to every kind of event: `create`,
`update` (which looks at the new object), `delete` and `generic`, taking a
`CreateEvent`, `UpdateEvent`, `DeleteEvent` or `GenericEvent`.

- `filter_cluster_operator(name)` accepts only the `ClusterOperator` with that
  name.
- `filter_control_plane_machine_set(namespace)` accepts only the
  `ControlPlaneMachineSet` named `cluster` in that namespace.
- `filter_control_plane_machines(namespace)` accepts only machines in that
  namespace whose labels `machine.openshift.io/cluster-api-machine-role` and
  `machine.openshift.io/cluster-api-machine-type` are both `master`.
- `cluster_operator_to_control_plane_machine_set(namespace)` returns a
  function that maps any object to a single `Request` for the machine set
  named `cluster` in that namespace.

A predicate that receives an object of the wrong kind raises `TypeError`; that
is a programming error, not a condition to handle at run time.

### `cpmsoperator.updates`

`ControlPlaneMachineSetReconciler.reconcile_machine_updates(logger, cpms,
machine_provider, machine_infos)` looks at the machine set's strategy:

- `RollingUpdate` goes to `reconcile_machine_rolling_update`.
- `OnDelete` goes to `reconcile_machine_on_delete_update`.
- `Recreate`, which is not supported, or any unknown value (described by
  `UnknownStrategyError`) sets a `Degraded` condition with reason
  `InvalidStrategy` on the machine set and logs the error through the given
  `logging.Logger`. Nothing is raised, because only a change by the user can
  fix it; an empty `Result` is returned.

## Example

```python
from cpmsoperator.models import Machine, ObjectMeta
from cpmsoperator.watch_filters import CreateEvent, filter_control_plane_machines

predicate = filter_control_plane_machines("test")

machine = Machine(
    metadata=ObjectMeta(
        name="master-0",
        namespace="test",
        labels={
            "machine.openshift.io/cluster-api-machine-role": "master",
            "machine.openshift.io/cluster-api-machine-type": "master",
        },
    )
)

assert predicate.create(CreateEvent(machine))
```

## What the package does not do

- The rolling-update and on-delete strategies do not yet act: they create and
  delete no machines, log nothing, leave the machine set unchanged and return
  an empty `Result`.
- There is no machine provider, no connection to a cluster and no command to
  run; the caller supplies the objects, the logger and the provider.

## Tests

The `test` extra installs pytest, which runs the suite in `tests/`.