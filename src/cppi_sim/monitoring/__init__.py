"""Monitoring exports."""

from cppi_sim.monitoring.audit import AuditLog
from cppi_sim.monitoring.monitor import Monitor
from cppi_sim.monitoring.notifier import LogNotifier, MemoryNotifier, Notifier

__all__ = [
    "AuditLog",
    "LogNotifier",
    "MemoryNotifier",
    "Monitor",
    "Notifier",
]
