"""
CryptoLedger - Column Types
"""
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.types import Numeric, TypeDecorator


class FixedDecimal(TypeDecorator):
    """
    Exact fixed-point column.

    Values are quantized to ``scale`` fractional digits on the way in and
    on the way out, so SQLite (which stores NUMERIC as REAL) returns the
    same Decimal that PostgreSQL would.
    """

    impl = Numeric
    cache_ok = True

    def __init__(self, precision: int = 18, scale: int = 8, **kwargs):
        super().__init__(precision=precision, scale=scale, asdecimal=True, **kwargs)
        self.scale = scale
        self.quantum = Decimal(1).scaleb(-scale)

    def _quantize(self, value):
        if value is None:
            return None
        return Decimal(str(value)).quantize(self.quantum, rounding=ROUND_HALF_UP)

    def process_bind_param(self, value, dialect):
        return self._quantize(value)

    def process_result_value(self, value, dialect):
        return self._quantize(value)
