"""
Paper execution: admitted grid orders -> immediate simulated fills.
No live capital, no exchange wiring.
"""

from execution.models import PaperFill
from execution.paper_executor import PaperExecutor

__all__ = ["PaperExecutor", "PaperFill"]
