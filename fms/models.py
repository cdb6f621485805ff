# fms/models.py
from typing import Literal, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .config import (
    MIN_DAYS, MAX_MTTF_DAYS, MAX_REPAIR_DAYS, MAX_QUANTITY, MAX_ADJUSTERS,
    MIN_YEARS, MAX_YEARS,
)
from .errors import ConfigurationError


class MachineType(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    mttf_days: int = Field(..., ge=MIN_DAYS, le=MAX_MTTF_DAYS)
    repair_days: int = Field(..., ge=MIN_DAYS, le=MAX_REPAIR_DAYS)
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY)


class AdjusterGroup(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(..., min_length=1)
    count: int = Field(..., ge=1, le=MAX_ADJUSTERS)
    capable_machines: List[str] = Field(..., min_length=1)

    @field_validator('capable_machines')
    @classmethod
    def _dedupe(cls, names: List[str]) -> List[str]:
        # Keep first occurrence order
        return list(dict.fromkeys(names))

    def can_service(self, machine_name: str) -> bool:
        return machine_name in self.capable_machines


class MachineInstance(BaseModel):
    uid: int
    type_index: int
    id_in_type: int
    status: Literal['working', 'queued', 'repairing'] = 'working'
    running_days: int = 0
    repair_days: int = 0
    failure_day: int = 1
    total_working_days: int = 0

    @property
    def working(self) -> bool:
        return self.status == 'working'


class AdjusterInstance(BaseModel):
    uid: int
    group_index: int
    id_in_group: int
    busy: bool = False
    days_worked: int = 0
    required_days: int = 0
    current_machine: Optional[int] = None  # Machine uid, not the instance
    total_busy_days: int = 0


class TimelineEvent(BaseModel):
    day: int
    kind: Literal['failure', 'assignment', 'repair_complete']
    description: str


class FactoryConfig(BaseModel):
    id: str = "custom"
    name: str = ""
    seed: Optional[int] = None
    years: int = Field(1, ge=MIN_YEARS, le=MAX_YEARS)
    machine_types: List[MachineType] = []
    adjuster_groups: List[AdjusterGroup] = []

    @model_validator(mode='after')
    def _check_references(self):
        names = [mt.name for mt in self.machine_types]
        if len(names) != len(set(names)):
            raise ConfigurationError("Duplicate machine type names")
        ids = [g.id for g in self.adjuster_groups]
        if len(ids) != len(set(ids)):
            raise ConfigurationError("Duplicate adjuster group IDs")
        for g in self.adjuster_groups:
            unknown = [n for n in g.capable_machines if n not in names]
            if unknown:
                raise ConfigurationError(
                    f"Adjuster group '{g.id}' references unknown machine types: {', '.join(unknown)}"
                )
        return self

    def machine_type_index(self, name: str) -> int:
        for i, mt in enumerate(self.machine_types):
            if mt.name == name:
                return i
        raise KeyError(name)

    def adjuster_group_index(self, group_id: str) -> int:
        for i, g in enumerate(self.adjuster_groups):
            if g.id == group_id:
                return i
        raise KeyError(group_id)

    def add_machine_type(self, machine_type: MachineType):
        if any(mt.name == machine_type.name for mt in self.machine_types):
            raise ConfigurationError("Machine type with this name already exists.")
        self.machine_types.append(machine_type)

    def add_adjuster_group(self, group: AdjusterGroup):
        if not self.machine_types:
            raise ConfigurationError("Add at least one machine type before adding adjusters.")
        if any(g.id == group.id for g in self.adjuster_groups):
            raise ConfigurationError("Adjuster group with this ID already exists.")
        known = {mt.name for mt in self.machine_types}
        unknown = [n for n in group.capable_machines if n not in known]
        if unknown:
            raise ConfigurationError(f"Unknown machine types: {', '.join(unknown)}")
        self.adjuster_groups.append(group)


# Results

class MachineTypeReport(BaseModel):
    name: str
    quantity: int
    working_days: int
    uptime_pct: float


class AdjusterGroupReport(BaseModel):
    id: str
    count: int
    busy_days: int
    utilization_pct: float


class SimulationReport(BaseModel):
    years: int
    days: int
    machine_types: List[MachineTypeReport]
    adjuster_groups: List[AdjusterGroupReport]
    overall_machine_utilization: float
    overall_adjuster_utilization: float
    max_queue_length: int
    mean_queue_length: float
    timeline: List[TimelineEvent] = []

    def by_machine_type(self) -> Dict[str, MachineTypeReport]:
        return {r.name: r for r in self.machine_types}

    def by_adjuster_group(self) -> Dict[str, AdjusterGroupReport]:
        return {r.id: r for r in self.adjuster_groups}


class MachineTypeStatus(BaseModel):
    machine_type: MachineType
    working: int
    broken: int


class AdjusterGroupStatus(BaseModel):
    group: AdjusterGroup
    busy: int
    idle: int
