"""Fill record kept by the paper executor."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class PaperFill:
    order_id: str
    side: str  # "buy" | "sell"
    qty: float
    price: float
    level: float
    timestamp: datetime
