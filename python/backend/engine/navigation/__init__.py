from backend.engine.navigation.navigator import (
    Event,
    Navigator,
    Screen,
    allowed_events,
    transition,
)

__all__ = ["Event", "Navigator", "Screen", "allowed_events", "transition"]
