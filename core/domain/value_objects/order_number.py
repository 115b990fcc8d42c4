"""Order number value object."""
from dataclasses import dataclass


@dataclass(frozen=True)
class OrderNumber:
    """
    Customer-facing order identifier derived from the numeric order id.

    Format: ORD-0001 (zero-padded to 4 digits, longer ids are not truncated)
    Invoices use INV-000001 (zero-padded to 6 digits).
    """
    value: int

    def __post_init__(self):
        if not isinstance(self.value, int) or self.value <= 0:
            raise ValueError(f"Order id must be a positive integer: {self.value}")

    @classmethod
    def parse(cls, text: str) -> "OrderNumber":
        """
        Parse "ORD-0042" or a bare "42".

        Raises:
            ValueError: If the text is not an order number
        """
        raw = text.strip().upper()
        if raw.startswith("ORD-"):
            raw = raw[4:]
        if not raw.isdigit():
            raise ValueError(f"Invalid order number: {text}")
        return cls(value=int(raw))

    @property
    def display(self) -> str:
        return f"ORD-{self.value:04d}"

    @property
    def invoice_number(self) -> str:
        return f"INV-{self.value:06d}"

    def __str__(self) -> str:
        return self.display
