"""Domain value objects."""

from .value_objects import ExecutionID, Money, round_money
from .order_number import OrderNumber

__all__ = [
    "ExecutionID",
    "Money",
    "OrderNumber",
    "round_money",
]
