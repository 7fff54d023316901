"""
Holter device scheduling and inventory consistency engine.

Books rhythm and pressure Holter monitors (each paired with a cable) to
patients over day-granular intervals and keeps device status, appointment
status and overdue notifications consistent with each other.
"""

from .engine import HolterEngine

__version__ = "0.1.0"

__all__ = ["HolterEngine", "__version__"]
