# fms/population.py
from collections import deque
from typing import Iterator, List
from .models import MachineType, AdjusterGroup, MachineInstance, AdjusterInstance
from .mechanics import FailureModel


class RepairQueue:
    """FIFO of machine uids waiting for an adjuster."""

    def __init__(self):
        self._items = deque()

    def enqueue(self, machine_uid: int):
        self._items.append(machine_uid)

    def dequeue(self) -> int:
        return self._items.popleft()

    def clear(self):
        self._items.clear()

    def __len__(self):
        return len(self._items)

    def __iter__(self) -> Iterator[int]:
        return iter(self._items)


class Population:
    """
    Owns every machine and adjuster instance for one run.
    Both live in flat arenas indexed by uid; adjusters refer to machines by uid.
    """

    def __init__(self):
        self.machines: List[MachineInstance] = []
        self.adjusters: List[AdjusterInstance] = []
        self.machines_by_type: List[List[int]] = []
        self.adjusters_by_group: List[List[int]] = []

    def initialize(self, machine_types: List[MachineType],
                   adjuster_groups: List[AdjusterGroup],
                   failure_model: FailureModel):
        self.machines = []
        self.machines_by_type = []
        for t, mt in enumerate(machine_types):
            uids = []
            for q in range(mt.quantity):
                uid = len(self.machines)
                self.machines.append(MachineInstance(
                    uid=uid, type_index=t, id_in_type=q,
                    failure_day=failure_model.draw(mt.mttf_days)
                ))
                uids.append(uid)
            self.machines_by_type.append(uids)

        self.adjusters = []
        self.adjusters_by_group = []
        for g, group in enumerate(adjuster_groups):
            uids = []
            for q in range(group.count):
                uid = len(self.adjusters)
                self.adjusters.append(AdjusterInstance(uid=uid, group_index=g, id_in_group=q))
                uids.append(uid)
            self.adjusters_by_group.append(uids)

    def machine(self, uid: int) -> MachineInstance:
        return self.machines[uid]

    def adjuster(self, uid: int) -> AdjusterInstance:
        return self.adjusters[uid]

    def machines_of_type(self, type_index: int) -> List[MachineInstance]:
        if type_index >= len(self.machines_by_type):
            return []
        return [self.machines[uid] for uid in self.machines_by_type[type_index]]

    def adjusters_of_group(self, group_index: int) -> List[AdjusterInstance]:
        if group_index >= len(self.adjusters_by_group):
            return []
        return [self.adjusters[uid] for uid in self.adjusters_by_group[group_index]]

    def machine_status(self, type_index: int):
        """(working, broken) counts for one machine type."""
        machines = self.machines_of_type(type_index)
        working = len([m for m in machines if m.working])
        return working, len(machines) - working

    def adjuster_status(self, group_index: int):
        """(busy, idle) counts for one adjuster group."""
        adjusters = self.adjusters_of_group(group_index)
        busy = len([a for a in adjusters if a.busy])
        return busy, len(adjusters) - busy
