"""
Core data models for the strategy scorecard.

Records are plain dataclasses: they carry no behaviour beyond normalizing
their enum fields, and hold no handle back to storage. Enum values are the
canonical spellings; alternate spellings seen in source data ("Not Started",
"cross-cutting") are accepted on construction and never stored.
"""
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

from scorecard.exceptions import InvalidRecordError

E = TypeVar("E", bound=Enum)


def _canonical(raw: str) -> str:
    return raw.strip().replace("-", "_").replace(" ", "_").casefold()


def parse_enum(enum_cls: Type[E], raw: Any, field_name: Optional[str] = None) -> E:
    """
    Coerce a raw value into ``enum_cls``.

    Matching ignores case and treats spaces, hyphens and underscores as
    the same separator.
    """
    if isinstance(raw, enum_cls):
        return raw
    if isinstance(raw, str):
        try:
            return enum_cls(raw)
        except ValueError:
            wanted = _canonical(raw)
            for member in enum_cls:
                if _canonical(member.value) == wanted:
                    return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise InvalidRecordError(
        f"Invalid {field_name or enum_cls.__name__}: {raw!r} (expected one of {allowed})",
        field=field_name,
    )


class OrgLevel(str, Enum):
    ENTERPRISE = "Enterprise"
    BUSINESS_UNIT = "Business_Unit"
    FUNCTION = "Function"
    DEPARTMENT = "Department"
    SUB_DEPARTMENT = "Sub_Department"
    INDIVIDUAL = "Individual"


class RecordStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    ARCHIVED = "Archived"


class GoalLevel(str, Enum):
    PILLAR = "Pillar"
    CATEGORY = "Category"
    GOAL = "Goal"
    PROGRAM = "Program"

    @property
    def rank(self) -> int:
        """Pillar=0 ... Program=3."""
        return _GOAL_LEVEL_ORDER.index(self)

    def child_level(self) -> Optional["GoalLevel"]:
        idx = self.rank + 1
        return _GOAL_LEVEL_ORDER[idx] if idx < len(_GOAL_LEVEL_ORDER) else None


_GOAL_LEVEL_ORDER = (GoalLevel.PILLAR, GoalLevel.CATEGORY, GoalLevel.GOAL, GoalLevel.PROGRAM)


class RagStatus(str, Enum):
    RED = "Red"
    AMBER = "Amber"
    GREEN = "Green"
    NOT_STARTED = "Not_Started"
    COMPLETE = "Complete"

    @property
    def precedence(self) -> int:
        """Worst-wins weight: higher is less favourable."""
        return RAG_PRECEDENCE[self]

    @property
    def label(self) -> str:
        """Display spelling ("Not Started")."""
        return self.value.replace("_", " ")


RAG_PRECEDENCE: Dict[RagStatus, int] = {
    RagStatus.RED: 5,
    RagStatus.AMBER: 4,
    RagStatus.NOT_STARTED: 3,
    RagStatus.GREEN: 2,
    RagStatus.COMPLETE: 1,
}


class AlignmentType(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    CROSS_CUTTING = "cross_cutting"


class Quarter(str, Enum):
    Q1 = "Q1"
    Q2 = "Q2"
    Q3 = "Q3"
    Q4 = "Q4"


@dataclass
class OrgUnit:
    """Node of the organization tree."""
    id: int
    name: str
    parent_id: Optional[int] = None
    org_level: OrgLevel = OrgLevel.DEPARTMENT
    status: RecordStatus = RecordStatus.ACTIVE
    priority: Optional[int] = None
    description: Optional[str] = None
    owner: Optional[str] = None

    def __post_init__(self):
        self.org_level = parse_enum(OrgLevel, self.org_level, "org_level")
        self.status = parse_enum(RecordStatus, self.status, "status")


@dataclass
class GoalItem:
    """
    Node of the goal tree (Pillar -> Category -> Goal -> Program).
    ``owner`` is free text, not a reference to any other record.
    """
    id: int
    name: str
    org_unit_id: int
    goal_level: GoalLevel
    parent_id: Optional[int] = None
    owner: Optional[str] = None
    status: RecordStatus = RecordStatus.ACTIVE
    priority: Optional[int] = None
    description: Optional[str] = None
    weight: Optional[float] = None

    def __post_init__(self):
        self.goal_level = parse_enum(GoalLevel, self.goal_level, "goal_level")
        self.status = parse_enum(RecordStatus, self.status, "status")

    @property
    def is_program(self) -> bool:
        return self.goal_level == GoalLevel.PROGRAM


@dataclass
class GoalAlignment:
    """
    Directed "references" edge between two goals.

    child/parent naming is historical: the endpoints may sit in unrelated
    subtrees and need not be a tree edge.
    """
    child_goal_id: int
    parent_goal_id: int
    alignment_type: AlignmentType = AlignmentType.PRIMARY
    alignment_strength: float = 1.0
    notes: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self):
        self.alignment_type = parse_enum(AlignmentType, self.alignment_type, "alignment_type")
        try:
            self.alignment_strength = float(self.alignment_strength)
        except (TypeError, ValueError):
            raise InvalidRecordError(
                f"alignment_strength must be a number, got {self.alignment_strength!r}",
                field="alignment_strength",
            )
        if not 0.0 <= self.alignment_strength <= 1.0:
            raise InvalidRecordError(
                f"alignment_strength must be within [0, 1], got {self.alignment_strength}",
                field="alignment_strength",
            )

    @property
    def is_self_referential(self) -> bool:
        return self.child_goal_id == self.parent_goal_id


@dataclass
class ProgressUpdate:
    """
    One entry of a program's append-only progress log.
    The update with the highest version is the program's current status.
    """
    id: int
    program_id: int
    version: int
    percent_complete: Optional[float] = None
    rag_status: RagStatus = RagStatus.NOT_STARTED
    update_text: str = ""
    author: Optional[str] = None
    metrics: Dict[str, Any] = field(default_factory=dict)
    created_at: Optional[str] = None

    def __post_init__(self):
        self.rag_status = parse_enum(RagStatus, self.rag_status, "rag_status")
        if isinstance(self.version, bool) or not isinstance(self.version, int) or self.version < 1:
            raise InvalidRecordError(
                f"version must be a positive integer, got {self.version!r}", field="version"
            )
        if self.percent_complete is not None:
            self.percent_complete = float(self.percent_complete)
            if not 0.0 <= self.percent_complete <= 100.0:
                raise InvalidRecordError(
                    f"percent_complete must be within [0, 100], got {self.percent_complete}",
                    field="percent_complete",
                )
        if self.metrics is None:
            self.metrics = {}
        if self.created_at is not None and not isinstance(self.created_at, str):
            raise InvalidRecordError(
                f"created_at must be an ISO-8601 string, got {self.created_at!r}", field="created_at"
            )


@dataclass
class ProgramObjective:
    """Quarterly objective attached to a Program."""
    program_id: int
    year: int
    quarter: Quarter
    objective_text: str
    target_value: Optional[float] = None
    target_unit: Optional[str] = None
    status: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self):
        self.quarter = parse_enum(Quarter, self.quarter, "quarter")
        if isinstance(self.year, bool):
            raise InvalidRecordError(f"year must be an integer, got {self.year!r}", field="year")
        try:
            self.year = int(self.year)
        except (TypeError, ValueError):
            raise InvalidRecordError(f"year must be an integer, got {self.year!r}", field="year")


def record_to_dict(record: Any) -> Dict[str, Any]:
    """
    Shallow, JSON-ready copy of a record.

    Accepts dataclass instances or mappings; enum members become their
    values.
    """
    if is_dataclass(record) and not isinstance(record, type):
        data = {f.name: getattr(record, f.name) for f in fields(record)}
    elif isinstance(record, Mapping):
        data = dict(record)
    else:
        raise TypeError(f"Cannot serialize record of type {type(record).__name__}")

    for key, value in data.items():
        if isinstance(value, Enum):
            data[key] = value.value
        elif isinstance(value, dict):
            data[key] = dict(value)
    return data
