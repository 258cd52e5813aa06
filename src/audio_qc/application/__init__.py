"""DDD application layer."""

from .event_publisher import EventPublisher, NullEventPublisher
from .quality_service import AssessAudioQuality, BatchOutcome

__all__ = ["EventPublisher", "NullEventPublisher", "AssessAudioQuality", "BatchOutcome"]
