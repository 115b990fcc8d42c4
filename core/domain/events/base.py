"""
Base Domain Event.

All domain events inherit from this base class. Aggregates collect them
while they change; application services drain them after commit to decide
which side effects (notifications) to run.
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Dict, Any
import uuid

from core.utils.datetime import utc_now


_METADATA_FIELDS = (
    'event_id', 'event_type', 'aggregate_id', 'execution_id', 'occurred_at'
)


@dataclass
class DomainEvent:
    """
    Base class for all domain events.

    Events are immutable records of things that have happened.
    """

    event_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    event_type: str = field(init=False, default="")
    aggregate_id: str = field(default="")
    execution_id: Optional[str] = None
    occurred_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        """Set event type from class name."""
        if not self.event_type:
            object.__setattr__(self, 'event_type', self.__class__.__name__)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert event to dictionary for logging and serialization.

        Returns:
            Dictionary representation of event
        """
        return {
            "event_id": self.event_id,
            "event_type": self.event_type,
            "aggregate_id": self.aggregate_id,
            "execution_id": self.execution_id,
            "occurred_at": self.occurred_at.isoformat(),
            "data": self._get_event_data(),
        }

    def _get_event_data(self) -> Dict[str, Any]:
        data = {}
        for key, value in self.__dict__.items():
            if key in _METADATA_FIELDS:
                continue
            if isinstance(value, Decimal):
                data[key] = str(value)
            elif isinstance(value, Enum):
                data[key] = value.value
            elif isinstance(value, datetime):
                data[key] = value.isoformat()
            else:
                data[key] = value
        return data
