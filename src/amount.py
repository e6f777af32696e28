import re
from dataclasses import dataclass
from typing import ClassVar

from errors import AmountOverflowError, AmountParseError, AmountUnderflowError

SCALE = 10_000
PRECISION = 4

MIN_SCALED = -(2 ** 63)
MAX_SCALED = 2 ** 63 - 1
# Integer digits of the largest magnitude, 922337203685477
MAX_WHOLE_DIGITS = 15

_AMOUNT_PATTERN = re.compile(r"^([+-]?)([0-9]*)(?:\.([0-9]*))?$")


def _check_range(scaled: int) -> None:
    if scaled > MAX_SCALED:
        raise AmountOverflowError()
    if scaled < MIN_SCALED:
        raise AmountUnderflowError()


@dataclass(frozen=True, order=True)
class Amount:
    """
    Signed fixed-point monetary value with four decimal places.
    Stored as an integer count of 1/10000 units, bounded to a signed 64-bit range.
    Arithmetic never wraps: results outside the range raise.
    """

    scaled: int = 0

    ZERO: ClassVar["Amount"]

    def __post_init__(self):
        _check_range(self.scaled)

    @classmethod
    def from_scaled(cls, scaled: int) -> "Amount":
        return cls(scaled)

    @classmethod
    def parse(cls, text: str) -> "Amount":
        """
        Parse a decimal string such as "5", "5.1", "5.1234", ".05" or "-.05".

        Raises:
            AmountParseError: empty input, bad characters, or more than 4 fractional digits
            AmountOverflowError / AmountUnderflowError: value outside the representable range
        """
        stripped = text.strip()
        match = _AMOUNT_PATTERN.match(stripped)
        if match is None:
            raise AmountParseError(text)

        sign, whole, fraction = match.groups()
        fraction = fraction or ""
        if not whole and not fraction:
            raise AmountParseError(text)
        if len(fraction) > PRECISION:
            raise AmountParseError(text)

        whole = whole.lstrip("0")
        if len(whole) > MAX_WHOLE_DIGITS:
            raise AmountUnderflowError() if sign == "-" else AmountOverflowError()

        magnitude = int(whole or "0") * SCALE + int(fraction.ljust(PRECISION, "0"))
        return cls(-magnitude if sign == "-" else magnitude)

    def add(self, other: "Amount") -> "Amount":
        return Amount(self.scaled + other.scaled)

    def sub(self, other: "Amount") -> "Amount":
        return Amount(self.scaled - other.scaled)

    def is_negative(self) -> bool:
        return self.scaled < 0

    def format(self) -> str:
        whole, fraction = divmod(abs(self.scaled), SCALE)
        sign = "-" if self.scaled < 0 else ""
        return f"{sign}{whole}.{fraction:0{PRECISION}d}"

    def __str__(self) -> str:
        return self.format()

    def __repr__(self) -> str:
        return f"Amount({self.format()})"


Amount.ZERO = Amount(0)
