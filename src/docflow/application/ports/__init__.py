"""Application ports - interfaces for external adapters."""

from docflow.application.ports.clock import Clock, utc_now
from docflow.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "Clock",
    "UnitOfWork",
    "UnitOfWorkFactory",
    "utc_now",
]
