"""Shared fixtures for the simulator tests."""

from __future__ import annotations

import pytest

from fms.engine import FactorySimulator
from fms.mechanics import FailureModel
from fms.models import AdjusterGroup, FactoryConfig, MachineType


class DeterministicFailureModel(FailureModel):
    """Every machine fails after exactly its MTTF. Counts draws."""

    def __init__(self):
        super().__init__(seed=0)
        self.draws = 0

    def draw(self, mttf):
        self.draws += 1
        return mttf


def make_config(machine_types, adjuster_groups, years=1):
    return FactoryConfig(
        machine_types=[MachineType(**mt) for mt in machine_types],
        adjuster_groups=[AdjusterGroup(**g) for g in adjuster_groups],
        years=years,
    )


def make_simulator(machine_types, adjuster_groups, deterministic=True, seed=7):
    config = make_config(machine_types, adjuster_groups)
    model = DeterministicFailureModel() if deterministic else None
    return FactorySimulator(config, seed=seed, failure_model=model)


def assert_invariants(sim: FactorySimulator):
    population = sim.population
    queued = list(sim.repair_queue)
    assert len(queued) == len(set(queued)), "machine queued twice"

    held = {}
    for adj in population.adjusters:
        assert adj.busy == (adj.current_machine is not None)
        if adj.busy:
            assert adj.current_machine not in held, "machine held by two adjusters"
            held[adj.current_machine] = adj
            group = sim.adjuster_groups[adj.group_index]
            machine = population.machine(adj.current_machine)
            assert group.can_service(sim.machine_types[machine.type_index].name)
            assert 0 <= adj.days_worked < adj.required_days

    for m in population.machines:
        in_queue = m.uid in queued
        in_repair = m.uid in held
        if m.status == 'working':
            assert not in_queue and not in_repair
        elif m.status == 'queued':
            assert in_queue and not in_repair
        else:
            assert in_repair and not in_queue


@pytest.fixture
def single_line():
    """One machine (MTTF 5, repair 2) and one adjuster."""
    return make_simulator(
        [{"name": "Lathe", "mttf_days": 5, "repair_days": 2, "quantity": 1}],
        [{"id": "A1", "count": 1, "capable_machines": ["Lathe"]}],
    )


@pytest.fixture
def shared_technician():
    """Two machine types that fail on the same day, one technician for both."""
    return make_simulator(
        [
            {"name": "Press", "mttf_days": 3, "repair_days": 4, "quantity": 1},
            {"name": "Drill", "mttf_days": 3, "repair_days": 4, "quantity": 1},
        ],
        [{"id": "Generalist", "count": 1, "capable_machines": ["Press", "Drill"]}],
    )


@pytest.fixture
def skills_gap():
    """Nobody can repair the Kiln."""
    return make_simulator(
        [
            {"name": "Loom", "mttf_days": 4, "repair_days": 1, "quantity": 2},
            {"name": "Kiln", "mttf_days": 2, "repair_days": 5, "quantity": 1},
        ],
        [{"id": "Textiles", "count": 1, "capable_machines": ["Loom"]}],
    )
