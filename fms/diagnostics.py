# fms/diagnostics.py
from typing import List
from .models import (
    MachineType, AdjusterGroup, TimelineEvent,
    MachineTypeReport, AdjusterGroupReport, SimulationReport,
)
from .population import Population


def _percent(numerator: int, denominator: int) -> float:
    return 100.0 * numerator / denominator if denominator > 0 else 0.0


class Diagnostics:
    def __init__(self):
        # Tracking Data
        self.queue_history: List[int] = []
        self.max_queue_length = 0

    def reset(self):
        self.queue_history = []
        self.max_queue_length = 0

    def record_step(self, queue_length: int):
        """Sample the repair queue at the end of a simulated day"""
        self.queue_history.append(queue_length)
        if queue_length > self.max_queue_length:
            self.max_queue_length = queue_length

    @property
    def days(self) -> int:
        return len(self.queue_history)

    def mean_queue_length(self) -> float:
        if not self.queue_history:
            return 0.0
        return sum(self.queue_history) / len(self.queue_history)

    def generate_report(self, machine_types: List[MachineType],
                        adjuster_groups: List[AdjusterGroup],
                        population: Population,
                        timeline: List[TimelineEvent],
                        years: int) -> SimulationReport:
        """
        Utilization figures for the days recorded so far.
        Overall figures are pooled sums, not an average of percentages.
        """
        days = self.days

        type_reports = []
        total_machine_days = 0
        total_working_days = 0
        for t, mt in enumerate(machine_types):
            working_days = sum(m.total_working_days for m in population.machines_of_type(t))
            possible = mt.quantity * days
            total_machine_days += possible
            total_working_days += working_days
            type_reports.append(MachineTypeReport(
                name=mt.name, quantity=mt.quantity,
                working_days=working_days,
                uptime_pct=_percent(working_days, possible)
            ))

        group_reports = []
        total_adjuster_days = 0
        total_busy_days = 0
        for g, group in enumerate(adjuster_groups):
            busy_days = sum(a.total_busy_days for a in population.adjusters_of_group(g))
            possible = group.count * days
            total_adjuster_days += possible
            total_busy_days += busy_days
            group_reports.append(AdjusterGroupReport(
                id=group.id, count=group.count,
                busy_days=busy_days,
                utilization_pct=_percent(busy_days, possible)
            ))

        return SimulationReport(
            years=years,
            days=days,
            machine_types=type_reports,
            adjuster_groups=group_reports,
            overall_machine_utilization=_percent(total_working_days, total_machine_days),
            overall_adjuster_utilization=_percent(total_busy_days, total_adjuster_days),
            max_queue_length=self.max_queue_length,
            mean_queue_length=self.mean_queue_length(),
            timeline=list(timeline),
        )
