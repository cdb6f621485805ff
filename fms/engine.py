# fms/engine.py
import json
import logging
from typing import List, Optional
from .models import (
    FactoryConfig, MachineInstance, AdjusterInstance, TimelineEvent,
    SimulationReport, MachineTypeStatus, AdjusterGroupStatus,
)
from .config import DAYS_PER_YEAR, MIN_YEARS, MAX_YEARS
from .errors import PreconditionError
from .mechanics import FailureModel
from .population import Population, RepairQueue
from .dispatch import FirstCapableAdjusterPolicy
from .diagnostics import Diagnostics

logger = logging.getLogger(__name__)


class FactorySimulator:
    def __init__(self, config: FactoryConfig, seed: Optional[int] = None,
                 failure_model: Optional[FailureModel] = None):
        self.config = config
        self.seed = seed if seed is not None else config.seed
        # One random stream for the simulator's whole lifetime
        self.failure_model = failure_model or FailureModel(self.seed)

        self.population = Population()
        self.repair_queue = RepairQueue()
        self.timeline: List[TimelineEvent] = []
        self.diagnostics = Diagnostics()
        self.policy: Optional[FirstCapableAdjusterPolicy] = None

        self.day = 0
        self.years = config.years
        self._initialized = False

    @classmethod
    def from_file(cls, scenario_file: str, seed: Optional[int] = None) -> 'FactorySimulator':
        with open(scenario_file, 'r') as f:
            scenario = json.load(f)
        return cls(FactoryConfig.model_validate(scenario), seed=seed)

    @property
    def machine_types(self):
        return self.config.machine_types

    @property
    def adjuster_groups(self):
        return self.config.adjuster_groups

    def check_preconditions(self, years: Optional[int] = None):
        if not self.machine_types:
            raise PreconditionError("Add at least one machine type before simulation.")
        if not self.adjuster_groups:
            raise PreconditionError("Add at least one adjuster group before simulation.")
        for g in self.adjuster_groups:
            if not g.capable_machines:
                raise PreconditionError(f"Adjuster group '{g.id}' services no machine types.")
        if years is not None and not (MIN_YEARS <= years <= MAX_YEARS):
            raise PreconditionError(f"Years to simulate must be between {MIN_YEARS} and {MAX_YEARS}.")

    def initialize(self):
        """Discard any previous run and build a fresh population."""
        self.check_preconditions()

        self.population.initialize(self.machine_types, self.adjuster_groups, self.failure_model)
        self.repair_queue.clear()
        self.timeline = []
        self.diagnostics.reset()
        # Rebuilt every run, the menu may have added definitions since
        self.policy = FirstCapableAdjusterPolicy(self.machine_types, self.adjuster_groups)
        self.day = 0
        self._initialized = True

        logger.info(
            "Simulation initialized: %d machine types, %d adjuster groups",
            len(self.machine_types), len(self.adjuster_groups)
        )

    def run(self, years: Optional[int] = None) -> SimulationReport:
        years = years if years is not None else self.config.years
        self.check_preconditions(years)
        self.years = years
        total_days = years * DAYS_PER_YEAR

        self.initialize()
        logger.info("Starting simulation for %d year(s) (%d days)", years, total_days)

        for _ in range(total_days):
            self.step()

        logger.info("Simulation complete. Max repair queue length: %d",
                    self.diagnostics.max_queue_length)
        return self.report()

    def step(self):
        """Advance one simulated day."""
        if not self._initialized:
            raise PreconditionError("Simulation has not been initialized.")

        self.day += 1

        # 1. Assign adjusters to queued machines (yesterday's failures included)
        for machine_uid, adjuster_uid in self.policy.assign(self.population, self.repair_queue):
            self._log_assignment(self.population.machine(machine_uid),
                                 self.population.adjuster(adjuster_uid))

        # 2. Machines run or fail
        self._update_machines()

        # 3. Adjusters work, possibly finishing repairs
        self._update_adjusters()

        # 4. Sample the queue at the day boundary
        self.diagnostics.record_step(len(self.repair_queue))

    def _update_machines(self):
        for m in self.population.machines:
            if not m.working:
                # Queued or under repair
                continue
            m.running_days += 1
            m.total_working_days += 1
            if m.running_days >= m.failure_day:
                mt = self.machine_types[m.type_index]
                m.status = 'queued'
                m.running_days = 0
                m.repair_days = 0
                # Threshold for the cycle after this repair
                m.failure_day = self.failure_model.draw(mt.mttf_days)
                self.repair_queue.enqueue(m.uid)
                self._record('failure', f"Machine {self._machine_label(m)} failed")

    def _update_adjusters(self):
        for adj in self.population.adjusters:
            if not adj.busy:
                continue
            machine = self.population.machine(adj.current_machine)
            adj.days_worked += 1
            adj.total_busy_days += 1
            machine.repair_days += 1
            if adj.days_worked >= adj.required_days:
                self._record(
                    'repair_complete',
                    f"Adjuster {self._adjuster_label(adj)} finished repair on machine "
                    f"{self._machine_label(machine)}"
                )
                adj.busy = False
                adj.days_worked = 0
                adj.required_days = 0
                adj.current_machine = None

                machine.status = 'working'
                machine.repair_days = 0
                machine.running_days = 0

    def _log_assignment(self, machine: MachineInstance, adj: AdjusterInstance):
        self._record(
            'assignment',
            f"Assign adjuster {self._adjuster_label(adj)} to repair machine {self._machine_label(machine)}"
        )

    def _record(self, kind: str, description: str):
        self.timeline.append(TimelineEvent(day=self.day, kind=kind, description=description))
        logger.debug("Day %d: %s", self.day, description)

    def _machine_label(self, m: MachineInstance) -> str:
        return f"{self.machine_types[m.type_index].name} #{m.id_in_type + 1}"

    def _adjuster_label(self, adj: AdjusterInstance) -> str:
        return f"{adj.id_in_group + 1} of group {self.adjuster_groups[adj.group_index].id}"

    def report(self) -> SimulationReport:
        return self.diagnostics.generate_report(
            self.machine_types, self.adjuster_groups,
            self.population, self.timeline, self.years
        )

    def machine_details(self, name: str) -> MachineTypeStatus:
        idx = self.config.machine_type_index(name)
        working, broken = self.population.machine_status(idx)
        return MachineTypeStatus(machine_type=self.machine_types[idx], working=working, broken=broken)

    def adjuster_details(self, group_id: str) -> AdjusterGroupStatus:
        idx = self.config.adjuster_group_index(group_id)
        busy, idle = self.population.adjuster_status(idx)
        return AdjusterGroupStatus(group=self.adjuster_groups[idx], busy=busy, idle=idle)
