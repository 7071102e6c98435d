"""Fixed stage ordering for the manufacturing project workflow."""

from types import MappingProxyType

from factory_pulse.errors.exceptions import InvalidStageError
from factory_pulse.models.enums import ProjectStage

STAGE_ORDER: tuple[ProjectStage, ...] = (
    ProjectStage.INQUIRY_RECEIVED,
    ProjectStage.TECHNICAL_REVIEW,
    ProjectStage.SUPPLIER_RFQ_SENT,
    ProjectStage.QUOTED,
    ProjectStage.ORDER_CONFIRMED,
    ProjectStage.PROCUREMENT_PLANNING,
    ProjectStage.IN_PRODUCTION,
    ProjectStage.SHIPPED_CLOSED,
)

STAGE_NAMES = MappingProxyType({
    ProjectStage.INQUIRY_RECEIVED: "Inquiry Received",
    ProjectStage.TECHNICAL_REVIEW: "Technical Review",
    ProjectStage.SUPPLIER_RFQ_SENT: "Supplier RFQ Sent",
    ProjectStage.QUOTED: "Quoted",
    ProjectStage.ORDER_CONFIRMED: "Order Confirmed",
    ProjectStage.PROCUREMENT_PLANNING: "Procurement & Planning",
    ProjectStage.IN_PRODUCTION: "In Production",
    ProjectStage.SHIPPED_CLOSED: "Shipped & Closed",
})

# (from, to) pairs permitted to move backwards. None today.
ALLOWED_BACKWARD_MOVEMENTS: frozenset[tuple[ProjectStage, ProjectStage]] = frozenset()

_STAGE_INDEX = MappingProxyType({stage: idx for idx, stage in enumerate(STAGE_ORDER)})


def coerce_stage(stage: ProjectStage | str) -> ProjectStage:
    """Return the ProjectStage for ``stage`` or raise InvalidStageError."""
    try:
        return ProjectStage(stage)
    except ValueError:
        raise InvalidStageError(stage, [s.value for s in STAGE_ORDER]) from None


def get_stage_index(stage: ProjectStage | str) -> int:
    """Ordinal position of ``stage`` in STAGE_ORDER (0-7)."""
    return _STAGE_INDEX[coerce_stage(stage)]


def get_stage_name(stage: ProjectStage | str) -> str:
    """Display label; unknown values are returned as-is."""
    return STAGE_NAMES.get(stage, str(stage))


def is_backward_movement_allowed(current: ProjectStage | str, new: ProjectStage | str) -> bool:
    return (coerce_stage(current), coerce_stage(new)) in ALLOWED_BACKWARD_MOVEMENTS


def is_terminal(stage: ProjectStage | str) -> bool:
    return coerce_stage(stage) == STAGE_ORDER[-1]


def stages_between(current: ProjectStage | str, target: ProjectStage | str) -> list[ProjectStage]:
    """Stages strictly between ``current`` and a later ``target``."""
    return list(STAGE_ORDER[get_stage_index(current) + 1:get_stage_index(target)])
