"""Print schedule schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from printshop.schemas.order import OrderRecord


class ScheduleEntry(BaseModel):
    """An active order placed on the single-printer timeline."""

    position: int
    order: OrderRecord
    print_time_minutes: int
    start_offset_minutes: int
    end_offset_minutes: int
    estimated_start: datetime
    estimated_end: datetime


class PrintSchedule(BaseModel):
    """Ordered production queue."""

    generated_at: datetime
    entries: list[ScheduleEntry] = Field(default_factory=list)
    total_print_minutes: int = 0
    total_print_time: str = "0m"
    estimated_completion: datetime | None = None


class ReorderRequest(BaseModel):
    """The full displayed queue, in its new order."""

    order_ids: list[str] = Field(min_length=1)


class MoveRequest(BaseModel):
    """Drag-and-drop: move one order to a new position."""

    order_id: str
    to_index: int = Field(ge=0)


class ReorderFailure(BaseModel):
    order_id: str
    error: str


class ReorderResult(BaseModel):
    """Aggregate outcome of a reorder batch.

    Updates already applied stay applied when others fail.
    """

    updated: list[str] = Field(default_factory=list)
    failed: list[ReorderFailure] = Field(default_factory=list)
    missing_priority_column: bool = False

    @property
    def failed_count(self) -> int:
        return len(self.failed)

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def message(self) -> str:
        if self.missing_priority_column:
            return (
                "print_priority column not found. "
                "Run the migration that adds orders.print_priority."
            )
        if self.failed:
            return f"Failed to update {self.failed_count} orders"
        return "Print schedule updated"
