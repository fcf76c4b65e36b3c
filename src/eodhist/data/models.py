"""Records returned by the eodhistoricaldata endpoints."""

from dataclasses import dataclass, asdict, fields
from datetime import date, datetime, timezone
from typing import Optional, Sequence

import pandas as pd


@dataclass(frozen=True)
class HistoricQuote:
    """One trading day of end-of-day data."""

    date: date
    adjusted_close: float
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[int] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Dividend:
    """A dividend payment. Only date and value are guaranteed by the vendor."""

    date: date
    value: float
    unadjusted_value: Optional[float] = None
    currency: Optional[str] = None
    declaration_date: Optional[date] = None
    record_date: Optional[date] = None
    payment_date: Optional[date] = None
    period: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Split:
    """A stock split, e.g. 4/1 for a four-for-one split."""

    date: date
    numerator: float
    denominator: float

    @property
    def ratio(self) -> float:
        return self.numerator / self.denominator

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class RealTimeQuote:
    """Latest (live or delayed) quote for a ticker."""

    code: str
    # UNIX timestamp, seconds since 1970-01-01 UTC
    timestamp: int
    gmtoffset: int
    open: float
    high: float
    low: float
    close: float
    volume: int
    previous_close: float
    change: float
    change_p: float

    @property
    def as_datetime(self) -> datetime:
        """Quote time as an aware UTC datetime."""
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc)

    def to_dict(self) -> dict:
        return asdict(self)


def records_to_frame(records: Sequence) -> pd.DataFrame:
    """
    Convert a sequence of records into a DataFrame.

    Dated records are indexed by 'date', realtime quotes by 'code'.

    Args:
        records: Records of a single type as returned by a client call

    Returns:
        DataFrame with one column per record field (empty if no records)

    Raises:
        TypeError: If records mix different types
    """
    if not records:
        return pd.DataFrame()

    record_type = type(records[0])
    if any(type(r) is not record_type for r in records):
        raise TypeError("records_to_frame expects records of a single type")

    columns = [f.name for f in fields(record_type)]
    df = pd.DataFrame([r.to_dict() for r in records], columns=columns)

    if 'date' in df.columns:
        df['date'] = pd.to_datetime(df['date'])
        return df.set_index('date')

    return df.set_index('code')
