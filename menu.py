# menu.py
import sys
import logging
from pydantic import ValidationError
from fms.config import (
    MIN_DAYS, MAX_MTTF_DAYS, MAX_REPAIR_DAYS, MAX_QUANTITY, MAX_ADJUSTERS,
    MIN_YEARS, MAX_YEARS,
)
from fms.engine import FactorySimulator
from fms.errors import SimulationError
from fms.models import FactoryConfig, MachineType, AdjusterGroup
from fms.report import render_machine_details, render_adjuster_details
from main import print_report
from colorama import Fore, Style, init

init(autoreset=True)


def get_int_input(prompt, min_val, max_val):
    while True:
        raw = input(prompt).strip()
        try:
            val = int(raw)
        except ValueError:
            print("Invalid input. Please enter an integer.")
            continue
        if val < min_val or val > max_val:
            print(f"Input must be between {min_val} and {max_val}.")
            continue
        return val


def get_non_empty_string(prompt):
    while True:
        s = input(prompt).strip()
        if not s:
            print("Input cannot be empty. Try again.")
            continue
        return s


def parse_selection(line, options):
    """
    Space separated 1-based indexes into `options`.
    Returns the selected names, first occurrence order, or raises ValueError.
    """
    selected = []
    for token in line.split():
        sel = int(token)
        if sel < 1 or sel > len(options):
            raise ValueError(f"Invalid number: {sel}")
        if options[sel - 1] not in selected:
            selected.append(options[sel - 1])
    if not selected:
        raise ValueError("Empty selection")
    return selected


class FactoryMenu:
    def __init__(self, config: FactoryConfig = None, seed=None):
        self.config = config if config is not None else FactoryConfig()
        # Kept across runs so every run draws from the same stream
        self.simulator = FactorySimulator(self.config, seed=seed)

    def add_machine_type(self):
        print("\n-- Add Machine Type --")
        name = get_non_empty_string("Enter machine type name: ")
        if any(mt.name == name for mt in self.config.machine_types):
            print(f"{Fore.RED}Machine type with this name already exists.{Style.RESET_ALL}")
            return
        mttf = get_int_input(f"Enter MTTF (days) (>={MIN_DAYS}): ", MIN_DAYS, MAX_MTTF_DAYS)
        repair = get_int_input(f"Enter Repair Time (days) (>={MIN_DAYS}): ", MIN_DAYS, MAX_REPAIR_DAYS)
        quantity = get_int_input(f"Enter Quantity (1-{MAX_QUANTITY}): ", 1, MAX_QUANTITY)

        try:
            self.config.add_machine_type(
                MachineType(name=name, mttf_days=mttf, repair_days=repair, quantity=quantity)
            )
        except (SimulationError, ValidationError) as e:
            print(f"{Fore.RED}{e}{Style.RESET_ALL}")
            return
        print(f"{Fore.GREEN}Machine type \"{name}\" added successfully.{Style.RESET_ALL}")

    def add_adjuster_group(self):
        if not self.config.machine_types:
            print(f"{Fore.RED}Add at least one machine type before adding adjusters.{Style.RESET_ALL}")
            return
        print("\n-- Add Adjuster Group --")
        group_id = get_non_empty_string("Enter Adjuster Group ID: ")
        if any(g.id == group_id for g in self.config.adjuster_groups):
            print(f"{Fore.RED}Adjuster group with this ID already exists.{Style.RESET_ALL}")
            return
        count = get_int_input(f"Enter Number of Adjusters (1-{MAX_ADJUSTERS}): ", 1, MAX_ADJUSTERS)

        names = [mt.name for mt in self.config.machine_types]
        print("Available machine types:")
        for i, name in enumerate(names, 1):
            print(f"{i}. {name}")
        print("Select machine types serviced by this adjuster group (enter numbers separated by space):")
        while True:
            try:
                selected = parse_selection(input("Selection: "), names)
                break
            except ValueError:
                print("Invalid selection. Try again.")

        try:
            self.config.add_adjuster_group(
                AdjusterGroup(id=group_id, count=count, capable_machines=selected)
            )
        except (SimulationError, ValidationError) as e:
            print(f"{Fore.RED}{e}{Style.RESET_ALL}")
            return
        print(f"{Fore.GREEN}Adjuster group \"{group_id}\" added successfully.{Style.RESET_ALL}")

    def run_simulation(self):
        try:
            self.simulator.check_preconditions()
        except SimulationError as e:
            print(f"{Fore.RED}Error: {e}{Style.RESET_ALL}")
            return None
        years = get_int_input(f"Enter number of years to simulate (>={MIN_YEARS}): ", MIN_YEARS, MAX_YEARS)
        print(f"\nStarting simulation for {years} year(s)...")
        report = self.simulator.run(years)
        print()
        print_report(report)
        self.details_menu()
        return report

    def details_menu(self):
        while True:
            print("\nView Details:\n1. Machine Types\n2. Adjuster Groups\n3. Exit")
            choice = get_int_input("Select option: ", 1, 3)
            if choice == 3:
                break
            if choice == 1:
                self.show_machine_details()
            else:
                self.show_adjuster_details()

    def show_machine_details(self):
        names = [mt.name for mt in self.config.machine_types]
        if not names:
            print("No machine types.")
            return
        print("Machine Types:")
        for i, name in enumerate(names, 1):
            print(f"{i}. {name}")
        sel = get_int_input("Select machine type: ", 1, len(names))
        print()
        for line in render_machine_details(self.simulator.machine_details(names[sel - 1])):
            print(line)

    def show_adjuster_details(self):
        ids = [g.id for g in self.config.adjuster_groups]
        if not ids:
            print("No adjuster groups.")
            return
        print("Adjuster Groups:")
        for i, group_id in enumerate(ids, 1):
            print(f"{i}. {group_id}")
        sel = get_int_input("Select adjuster group: ", 1, len(ids))
        print()
        for line in render_adjuster_details(self.simulator.adjuster_details(ids[sel - 1])):
            print(line)

    def main_menu(self):
        while True:
            print(f"\n{Fore.CYAN}=== Factory Maintenance Optimization Simulator ==={Style.RESET_ALL}")
            print("1. Add Machine Type")
            print("2. Add Adjuster Group")
            print("3. Run Simulation")
            print("4. Exit")
            choice = get_int_input("Select option: ", 1, 4)
            if choice == 1:
                self.add_machine_type()
            elif choice == 2:
                self.add_adjuster_group()
            elif choice == 3:
                self.run_simulation()
            else:
                print("Goodbye!")
                return


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING)
    seed = int(sys.argv[1]) if len(sys.argv) > 1 else None
    FactoryMenu(seed=seed).main_menu()
