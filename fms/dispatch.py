# fms/dispatch.py
from typing import List, Optional, Tuple
from .models import MachineType, AdjusterGroup, MachineInstance
from .population import Population, RepairQueue

# (machine uid, adjuster uid)
Assignment = Tuple[int, int]


class AssignmentPolicyBase:
    def assign(self, population: Population, queue: RepairQueue) -> List[Assignment]:
        raise NotImplementedError("Each policy must implement the 'assign' method.")

    def __str__(self):
        return self.__class__.__name__


class FirstCapableAdjusterPolicy(AssignmentPolicyBase):
    """
    Offer queued machines in arrival order to the first idle adjuster of the
    first capable group (groups in configured order, adjusters by index).
    Machines nobody can take go back to the tail and wait for tomorrow.
    """

    def __init__(self, machine_types: List[MachineType], adjuster_groups: List[AdjusterGroup]):
        self.machine_types = machine_types
        self.adjuster_groups = adjuster_groups

    def assign(self, population: Population, queue: RepairQueue) -> List[Assignment]:
        assignments = []
        # Only the machines queued before this pass; re-queued ones wait a day
        pending = len(queue)
        for _ in range(pending):
            uid = queue.dequeue()
            machine = population.machine(uid)
            adjuster_uid = self._find_adjuster(population, machine)
            if adjuster_uid is None:
                queue.enqueue(uid)
                continue
            self._start_job(population, machine, adjuster_uid)
            assignments.append((uid, adjuster_uid))
        return assignments

    def _find_adjuster(self, population: Population, machine: MachineInstance) -> Optional[int]:
        name = self.machine_types[machine.type_index].name
        for g, group in enumerate(self.adjuster_groups):
            if not group.can_service(name):
                continue
            for adjuster_uid in population.adjusters_by_group[g]:
                if not population.adjuster(adjuster_uid).busy:
                    return adjuster_uid
        return None

    def _start_job(self, population: Population, machine: MachineInstance, adjuster_uid: int):
        adj = population.adjuster(adjuster_uid)
        adj.busy = True
        adj.days_worked = 0
        adj.required_days = self.machine_types[machine.type_index].repair_days
        adj.current_machine = machine.uid

        machine.status = 'repairing'
        machine.repair_days = 0
