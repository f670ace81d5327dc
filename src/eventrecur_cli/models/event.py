"""Event data models built from recurrence rules."""

from datetime import date, datetime, time

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EventTemplate(BaseModel):
    """Fields shared by every event a recurring rule creates.

    Attributes:
        title: Event title
        event_time: Time of day in HH:MM form
        description: Optional longer description
        event_type: Optional event category name (e.g., "Culto")
        group_id: Optional owning group
    """

    title: str
    event_time: str = Field(default="19:00")
    description: str | None = None
    event_type: str | None = None
    group_id: str | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("title cannot be empty")
        return v.strip()

    @field_validator("event_time")
    @classmethod
    def validate_event_time(cls, v: str) -> str:
        """Accept HH:MM or HH:MM:SS and normalise to HH:MM."""
        v = v.strip()
        try:
            parsed = time.fromisoformat(v[:5])
        except ValueError as e:
            raise ValueError(f"event_time must be HH:MM, got '{v}'") from e
        return parsed.strftime("%H:%M")

    def at(self, day: date) -> datetime:
        """Combine *day* with the template's time of day."""
        return datetime.combine(day, time.fromisoformat(self.event_time))


class EventPayload(BaseModel):
    """One concrete event row, ready for a batch insert."""

    model_config = ConfigDict(frozen=True)

    title: str
    event_at: datetime
    description: str | None = None
    event_type: str | None = None
    group_id: str | None = None
    recurring_rule_id: str | None = None


class RecurrencePreview(BaseModel):
    """First few occurrences of a rule, as shown while the rule is edited.

    Attributes:
        summary: Human-readable rule description
        dates: Up to ``limit`` occurrences
        total: Number of occurrences the rule generates
        truncated: Whether more occurrences exist than shown
    """

    summary: str
    dates: list[date] = Field(default_factory=list)
    total: int = 0
    truncated: bool = False
