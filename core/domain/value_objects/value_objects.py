"""Domain value objects - pure Python immutable types."""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from uuid import UUID, uuid4


CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round to two decimal places, half up."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class Money:
    """
    Immutable monetary value with currency.

    CRITICAL: Always use Decimal, never float!
    """
    amount: Decimal
    currency: str = "INR"

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        if not isinstance(self.currency, str) or len(self.currency) != 3:
            raise ValueError(
                f"Currency must be 3-letter ISO code, got: {self.currency}"
            )
        object.__setattr__(self, 'currency', self.currency.upper())

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"

    def __add__(self, other: 'Money') -> 'Money':
        """Add two Money objects (must have same currency)."""
        self._check_currency(other, "add")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __sub__(self, other: 'Money') -> 'Money':
        """Subtract two Money objects (must have same currency)."""
        self._check_currency(other, "subtract")
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def __mul__(self, factor) -> 'Money':
        """Multiply by a quantity or rate."""
        return Money(amount=self.amount * Decimal(str(factor)), currency=self.currency)

    def _check_currency(self, other: 'Money', op: str) -> None:
        if self.currency != other.currency:
            raise ValueError(
                f"Cannot {op} different currencies: {self.currency} vs {other.currency}"
            )

    def is_positive(self) -> bool:
        """Check if amount is positive."""
        return self.amount > 0

    def is_zero(self) -> bool:
        """Check if amount is zero."""
        return self.amount == 0

    def rounded(self) -> 'Money':
        """Return the amount rounded to cents."""
        return Money(amount=round_money(self.amount), currency=self.currency)

    def to_minor_units(self) -> int:
        """
        Convert to the smallest currency unit (paise, cents).

        Returns:
            Integer amount, rounded half up (1190.00 INR -> 119000)
        """
        return int((self.amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @property
    def symbol(self) -> str:
        """Display symbol used in customer emails."""
        return "₹" if self.currency == "INR" else "$"


@dataclass(frozen=True)
class ExecutionID:
    """Unique identifier for workflow execution tracing."""

    value: UUID

    @classmethod
    def generate(cls) -> "ExecutionID":
        """Generate a new ExecutionID."""
        return cls(value=uuid4())

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)
