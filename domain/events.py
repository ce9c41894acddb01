"""Booking domain events and the sink contract"""
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Sequence, Tuple
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from domain.value_objects import CampsiteId, GuestId, AccommodationSpotId


class BookingEvent(BaseModel):
    """Base for events emitted by the Booking aggregate"""
    event_id: UUID = Field(default_factory=uuid4)
    booking_id: UUID
    guest_id: GuestId
    occurred_on: datetime

    model_config = ConfigDict(frozen=True)

    @property
    def event_type(self) -> str:
        return type(self).__name__


class BookingCreated(BookingEvent):
    campsite_id: CampsiteId
    check_in: date
    check_out: date


class BookingConfirmed(BookingEvent):
    spot_id: AccommodationSpotId
    check_in: date
    check_out: date


class BookingCancelled(BookingEvent):
    reason: str = ""
    was_confirmed: bool = False


Events = Tuple[BookingEvent, ...]

NO_EVENTS: Events = ()


class EventSink(ABC):
    """Receives booking events for notification and audit"""

    @abstractmethod
    async def publish(self, events: Sequence[BookingEvent]) -> None:
        """Deliver events; the core does not retry"""
        pass
