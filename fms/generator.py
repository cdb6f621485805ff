# fms/generator.py
import json
import logging
import os
from typing import List, Dict, Any
from .config import SCENARIO_DIR
from .models import FactoryConfig

logger = logging.getLogger(__name__)

SCENARIO_DEFINITIONS: List[Dict[str, Any]] = [
    {
        "id": "S-A",
        "name": "Single Line",
        "seed": 42,
        "years": 1,
        "description": "One machine, one adjuster. Plain fail/repair cycles.",
        "machine_types": [
            {"name": "Lathe", "mttf_days": 5, "repair_days": 2, "quantity": 1}
        ],
        "adjuster_groups": [
            {"id": "A1", "count": 1, "capable_machines": ["Lathe"]}
        ]
    },
    {
        "id": "S-B",
        "name": "Shared Technician",
        "seed": 101,
        "years": 1,
        "description": "Two machine types compete for a single technician.",
        "machine_types": [
            {"name": "Press", "mttf_days": 10, "repair_days": 4, "quantity": 1},
            {"name": "Drill", "mttf_days": 10, "repair_days": 4, "quantity": 1}
        ],
        "adjuster_groups": [
            {"id": "Generalist", "count": 1, "capable_machines": ["Press", "Drill"]}
        ]
    },
    {
        "id": "S-C",
        "name": "Skills Gap",
        "seed": 202,
        "years": 1,
        "description": "Nobody is trained on the Kiln.",
        "machine_types": [
            {"name": "Loom", "mttf_days": 20, "repair_days": 3, "quantity": 4},
            {"name": "Kiln", "mttf_days": 30, "repair_days": 5, "quantity": 2}
        ],
        "adjuster_groups": [
            {"id": "Textiles", "count": 2, "capable_machines": ["Loom"]}
        ]
    },
    {
        "id": "S-D",
        "name": "Mixed Shop",
        "seed": 303,
        "years": 5,
        "description": "Specialists backed by a small general crew.",
        "machine_types": [
            {"name": "CNC", "mttf_days": 60, "repair_days": 3, "quantity": 20},
            {"name": "Welder", "mttf_days": 30, "repair_days": 2, "quantity": 15},
            {"name": "Furnace", "mttf_days": 180, "repair_days": 14, "quantity": 4}
        ],
        "adjuster_groups": [
            {"id": "Machinists", "count": 2, "capable_machines": ["CNC"]},
            {"id": "Fitters", "count": 2, "capable_machines": ["Welder"]},
            {"id": "General", "count": 1, "capable_machines": ["CNC", "Welder", "Furnace"]}
        ]
    }
]


def ensure_dir(scenario_dir: str = SCENARIO_DIR):
    if not os.path.exists(scenario_dir):
        os.makedirs(scenario_dir)


def generate_scenarios(scenario_dir: str = SCENARIO_DIR) -> List[str]:
    """Write the bundled scenarios as JSON files. Returns the paths written."""
    ensure_dir(scenario_dir)
    logger.info("Generating %d scenarios in %s...", len(SCENARIO_DEFINITIONS), scenario_dir)

    paths = []
    for s_def in SCENARIO_DEFINITIONS:
        # Fail here rather than when the file is loaded
        FactoryConfig.model_validate(s_def)
        fname = os.path.join(scenario_dir, f"{s_def['id']}.json")
        with open(fname, 'w') as f:
            json.dump(s_def, f, indent=2)
        paths.append(fname)

    logger.info("Done.")
    return paths


def get_scenario(scenario_id: str) -> FactoryConfig:
    """Build a bundled scenario without touching the filesystem"""
    for s_def in SCENARIO_DEFINITIONS:
        if s_def['id'] == scenario_id:
            return FactoryConfig.model_validate(s_def)
    raise KeyError(scenario_id)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    generate_scenarios()
