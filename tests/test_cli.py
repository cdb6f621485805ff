"""Tests for report rendering, the batch runner and the interactive menu."""

from __future__ import annotations

import json
import os

import pytest

import main
import menu
from conftest import make_simulator
from fms.models import FactoryConfig
from fms.report import render_adjuster_details, render_machine_details, render_report


def feed(monkeypatch, *answers):
    answers = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))


class TestReport:

    def test_report_lines(self, single_line):
        lines = render_report(single_line.run(1), recent=3)
        assert lines[0] == "=== Simulation Results ==="
        assert any(line.startswith("Lathe") and "71.51" in line for line in lines)
        assert "Overall adjuster utilization: 28.49%" in lines
        assert "Max repair queue length during simulation: 1" in lines
        assert lines[-4] == "Recent Simulation Events (last 3):"
        assert all(line.startswith("Day ") for line in lines[-3:])

    def test_detail_lines(self, shared_technician):
        shared_technician.run(1)
        machine = render_machine_details(shared_technician.machine_details("Drill"))
        crew = render_adjuster_details(shared_technician.adjuster_details("Generalist"))
        assert machine[0] == "Details of machine: Drill"
        assert "Repair time (days): 4" in machine
        assert "  - Press" in crew and "  - Drill" in crew


class TestBatchRunner:

    def test_generate_only(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main.main(["--generate"]) == 0
        assert sorted(os.listdir("data/scenarios")) == ["S-A.json", "S-B.json", "S-C.json", "S-D.json"]

    def test_single_scenario(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        main.main(["--generate"])
        code = main.main(["--scenario", "data/scenarios/S-B.json", "--years", "2", "--seed", "4", "--events", "2"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Running scenario S-B: Shared Technician" in out
        assert "Overall machine utilization" in out

    def test_baseline_writes_results(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        results = main.run_baseline(seed=1)
        assert set(results) == {"S-A", "S-B", "S-C", "S-D"}
        with open("results/baseline.json") as f:
            saved = json.load(f)
        assert saved["S-C"]["max_queue_length"] >= 1
        assert "timeline" not in saved["S-A"]

    def test_bad_scenario_reports_error(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "broken.json"
        path.write_text(json.dumps({"machine_types": [], "adjuster_groups": []}))
        assert main.main(["--scenario", str(path)]) == 1
        assert "at least one machine type" in capsys.readouterr().out
        assert main.main(["--scenario", "missing.json"]) == 1

    def test_malformed_scenario_reports_error(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "garbled.json"
        path.write_text("{not json")
        assert main.main(["--scenario", str(path)]) == 1
        assert "Error:" in capsys.readouterr().out


class TestMenu:

    def test_parse_selection(self):
        assert menu.parse_selection("2 1 2", ["A", "B"]) == ["B", "A"]
        for bad in ["", "3", "x", "0"]:
            with pytest.raises(ValueError):
                menu.parse_selection(bad, ["A", "B"])

    def test_int_input_reprompts(self, monkeypatch, capsys):
        feed(monkeypatch, "abc", "0", "7", "3")
        assert menu.get_int_input("> ", 1, 5) == 3
        out = capsys.readouterr().out
        assert "Please enter an integer" in out
        assert "between 1 and 5" in out

    def test_build_and_run(self, monkeypatch, capsys):
        m = menu.FactoryMenu(seed=8)
        feed(monkeypatch, "Lathe", "5", "2", "1")
        m.add_machine_type()
        feed(monkeypatch, "Crew", "1", "9", "1")
        m.add_adjuster_group()
        assert m.config.adjuster_groups[0].capable_machines == ["Lathe"]

        # years, machine details for type 1, adjuster details for group 1, exit
        feed(monkeypatch, "1", "1", "1", "2", "1", "3")
        report = m.run_simulation()
        assert report.days == 365
        out = capsys.readouterr().out
        assert "Details of machine: Lathe" in out
        assert "Adjuster Group: Crew" in out

    def test_duplicates_and_missing_definitions(self, monkeypatch, capsys):
        m = menu.FactoryMenu(config=FactoryConfig())
        m.add_adjuster_group()
        assert m.run_simulation() is None
        feed(monkeypatch, "Lathe", "5", "2", "1")
        m.add_machine_type()
        feed(monkeypatch, "Lathe")
        m.add_machine_type()
        out = capsys.readouterr().out
        assert "Add at least one machine type before adding adjusters." in out
        assert "Error: Add at least one machine type before simulation." in out
        assert "already exists" in out
        assert len(m.config.machine_types) == 1

    def test_main_menu_exit(self, monkeypatch, capsys):
        feed(monkeypatch, "4")
        menu.FactoryMenu().main_menu()
        assert "Goodbye!" in capsys.readouterr().out


def test_simulator_shared_with_menu_reruns_cleanly(monkeypatch):
    sim = make_simulator(
        [{"name": "Lathe", "mttf_days": 5, "repair_days": 2, "quantity": 1}],
        [{"id": "A1", "count": 1, "capable_machines": ["Lathe"]}],
    )
    m = menu.FactoryMenu(config=sim.config)
    m.simulator = sim
    feed(monkeypatch, "1", "3", "1", "3")
    first = m.run_simulation()
    second = m.run_simulation()
    assert first.model_dump() == second.model_dump()
