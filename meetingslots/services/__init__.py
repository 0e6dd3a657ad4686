"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .meeting_scheduler import EventSourceProtocol, MeetingSchedulerService, SchedulingResult

__all__ = ["EventSourceProtocol", "MeetingSchedulerService", "SchedulingResult"]
