"""
meetingslots - find free meeting slots in a day of calendar events.
"""

__version__ = "0.1.0"
