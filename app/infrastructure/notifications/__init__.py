"""Realtime notification helpers for the infrastructure layer."""

from .manager import SessionRegistry
from .publisher import LivePushPublisher, serialize_notification

__all__ = [
    "LivePushPublisher",
    "SessionRegistry",
    "serialize_notification",
]
