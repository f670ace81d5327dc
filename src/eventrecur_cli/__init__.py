"""EventRecur CLI: recurring-event date generation for ministry calendars."""

__version__ = "0.1.0"
