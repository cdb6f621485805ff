# fms/report.py
from typing import List
from .config import RECENT_EVENTS, REPORT_WIDTH
from .models import SimulationReport, MachineTypeStatus, AdjusterGroupStatus


def render_report(report: SimulationReport, recent: int = RECENT_EVENTS) -> List[str]:
    """Results tables plus the last `recent` timeline events, one string per line."""
    lines = ["=== Simulation Results ===", "", "Machine Utilization:"]
    lines.append(f"{'Machine Type':<25}{'Quantity':<15}{'Estimated Uptime(%)':<20}")
    lines.append("-" * REPORT_WIDTH)
    for r in report.machine_types:
        lines.append(f"{r.name:<25}{r.quantity:<15}{r.uptime_pct:<20.2f}")
    lines.append("")
    lines.append(f"Overall machine utilization: {report.overall_machine_utilization:.2f}%")

    lines += ["", "Adjuster Utilization:"]
    lines.append(f"{'Adjuster ID':<15}{'Count':<15}{'Estimated Utilization(%)':<25}")
    lines.append("-" * REPORT_WIDTH)
    for r in report.adjuster_groups:
        lines.append(f"{r.id:<15}{r.count:<15}{r.utilization_pct:<25.2f}")
    lines.append("")
    lines.append(f"Overall adjuster utilization: {report.overall_adjuster_utilization:.2f}%")

    lines.append("")
    lines.append(f"Max repair queue length during simulation: {report.max_queue_length}")
    lines.append(f"Mean repair queue length: {report.mean_queue_length:.2f}")

    if recent > 0:
        lines += ["", f"Recent Simulation Events (last {recent}):"]
        for e in report.timeline[-recent:]:
            lines.append(f"Day {e.day}: {e.description}")
    return lines


def render_machine_details(status: MachineTypeStatus) -> List[str]:
    mt = status.machine_type
    return [
        f"Details of machine: {mt.name}",
        f"MTTF (days): {mt.mttf_days}",
        f"Repair time (days): {mt.repair_days}",
        f"Quantity: {mt.quantity}",
        f"Currently working: {status.working}",
        f"Currently broken/repairing: {status.broken}",
    ]


def render_adjuster_details(status: AdjusterGroupStatus) -> List[str]:
    g = status.group
    lines = [
        f"Adjuster Group: {g.id}",
        f"Count: {g.count}",
        "Services machine types:",
    ]
    lines += [f"  - {name}" for name in g.capable_machines]
    lines.append(f"Currently busy: {status.busy}")
    lines.append(f"Currently idle: {status.idle}")
    return lines
