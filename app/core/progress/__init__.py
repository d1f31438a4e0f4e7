"""
Progress tracking modules.
"""
from .ledger import ProgressLedger
from .schedule_state import ScheduleService
from .dashboard import DashboardComposer

__all__ = [
    "ProgressLedger",
    "ScheduleService",
    "DashboardComposer",
]
