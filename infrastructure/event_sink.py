"""In-process event sink.

Records every published booking event and dispatches it to the handlers
registered for its type. A failing handler is logged and does not stop the
remaining handlers; nothing is retried.
"""
import logging
from typing import Callable, Dict, List, Sequence, Type

from domain.events import BookingEvent, EventSink

logger = logging.getLogger(__name__)

EventHandler = Callable[[BookingEvent], None]


class InMemoryEventSink(EventSink):
    """Event sink keeping published events in memory"""

    def __init__(self):
        self._handlers: Dict[Type[BookingEvent], List[EventHandler]] = {}
        self.published: List[BookingEvent] = []

    def register_handler(self, event_type: Type[BookingEvent], handler: EventHandler) -> None:
        """Register a handler; several handlers per event type are allowed"""
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug("Registered event handler for %s", event_type.__name__)

    async def publish(self, events: Sequence[BookingEvent]) -> None:
        for event in events:
            self.published.append(event)
            handlers = self._handlers.get(type(event), [])

            if not handlers:
                logger.debug("No handlers registered for event %s", event.event_type)
                continue

            logger.info("Publishing event: %s (booking=%s)", event.event_type, event.booking_id)
            for handler in handlers:
                try:
                    handler(event)
                except Exception as e:
                    logger.error(
                        "Error in handler %s for event %s: %s",
                        getattr(handler, "__name__", repr(handler)), event.event_type, e,
                        exc_info=True
                    )

    def events_of(self, event_type: Type[BookingEvent]) -> List[BookingEvent]:
        return [e for e in self.published if isinstance(e, event_type)]

    def clear(self) -> None:
        self.published.clear()
