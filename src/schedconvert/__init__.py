"""SchedConvert - Thai schedule listings to calendar events."""

__version__ = "1.0.0"
