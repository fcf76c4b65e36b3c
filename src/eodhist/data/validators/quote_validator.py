"""
Quality checks for end-of-day quote histories.

Validates parsed HistoricQuote sequences for:
- Strictly increasing dates
- OHLC consistency (high >= low >= 0, open/close inside the range)
- Positive adjusted close
- Extreme single-day moves and zero-volume days (warnings)
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..models import HistoricQuote, records_to_frame
from ...config import get_settings, ValidationConfig
from ...utils.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Results from quote validation."""

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    info: dict = field(default_factory=dict)

    def __str__(self) -> str:
        """String representation of validation results."""
        lines = [f"Validation: {'PASSED' if self.is_valid else 'FAILED'}"]

        if self.errors:
            lines.append(f"\nErrors ({len(self.errors)}):")
            for error in self.errors:
                lines.append(f"  - {error}")

        if self.warnings:
            lines.append(f"\nWarnings ({len(self.warnings)}):")
            for warning in self.warnings:
                lines.append(f"  - {warning}")

        if self.info:
            lines.append("\nInfo:")
            for key, value in self.info.items():
                lines.append(f"  - {key}: {value}")

        return "\n".join(lines)


class QuoteValidator:
    """Validator for end-of-day quote histories."""

    def __init__(self, config: Optional[ValidationConfig] = None):
        """
        Initialize validator.

        Args:
            config: Thresholds to use (defaults to the global settings)
        """
        self.config = config or get_settings().validation

    def validate(self, quotes: Sequence[HistoricQuote], symbol: str) -> ValidationResult:
        """
        Validate a quote history.

        Args:
            quotes: Quotes as returned by get_quote_history
            symbol: Symbol being validated (for messages)

        Returns:
            ValidationResult with errors, warnings, and info
        """
        errors = []
        warnings = []
        info = {'data_points': len(quotes)}

        if len(quotes) < self.config.min_data_points:
            warnings.append(
                f"Only {len(quotes)} data points (expected >= {self.config.min_data_points})"
            )

        if not quotes:
            return self._result(symbol, errors, warnings, info)

        df = records_to_frame(list(quotes))

        # 1. Chronological order without duplicates
        if not df.index.is_monotonic_increasing or df.index.has_duplicates:
            errors.append("Dates are not strictly increasing")

        info['first_date'] = df.index.min().date().isoformat()
        info['last_date'] = df.index.max().date().isoformat()

        # 2. Adjusted close must be positive
        invalid_adj = (df['adjusted_close'] <= 0) | df['adjusted_close'].isna()
        if invalid_adj.any():
            errors.append(
                f"Invalid adjusted close (zero, negative, or missing): {int(invalid_adj.sum())} occurrences"
            )

        # 3. OHLC consistency, rows with missing prices are skipped
        if self.config.validate_ohlc:
            ohlc = df[['open', 'high', 'low', 'close']].astype(float)

            negative_low = ohlc['low'] < 0
            if negative_low.any():
                errors.append(f"Negative low price: {int(negative_low.sum())} occurrences")

            inconsistent = (
                (ohlc['high'] < ohlc['low']) |
                (ohlc['close'] > ohlc['high']) |
                (ohlc['close'] < ohlc['low']) |
                (ohlc['open'] > ohlc['high']) |
                (ohlc['open'] < ohlc['low'])
            )
            if inconsistent.any():
                errors.append(f"OHLC data inconsistency: {int(inconsistent.sum())} occurrences")

            info['rows_missing_prices'] = int(ohlc.isna().any(axis=1).sum())

        # 4. Extreme price movements
        if len(df) > 1:
            returns = df['adjusted_close'].astype(float).pct_change().dropna()
            extreme = returns[returns.abs() > self.config.max_single_day_return]
            if len(extreme) > 0:
                warnings.append(
                    f"Extreme price movements detected: {len(extreme)} days with "
                    f"|return| > {self.config.max_single_day_return*100:.0f}% "
                    f"(max: {extreme.abs().max()*100:.1f}%)"
                )

        # 5. Zero volume days
        zero_volume = df['volume'] == 0
        if zero_volume.any():
            info['zero_volume_days'] = int(zero_volume.sum())
            if zero_volume.sum() / len(df) > self.config.max_zero_volume_pct:
                warnings.append(
                    f"{int(zero_volume.sum())} days with zero volume "
                    f"({zero_volume.sum()/len(df)*100:.1f}% of data)"
                )

        return self._result(symbol, errors, warnings, info)

    def _result(self, symbol: str, errors: List[str], warnings: List[str], info: dict) -> ValidationResult:
        is_valid = len(errors) == 0

        if not is_valid:
            logger.error(f"Validation failed for {symbol}: {len(errors)} errors")
        elif warnings:
            logger.warning(f"Validation passed with warnings for {symbol}: {len(warnings)} warnings")
        else:
            logger.info(f"Validation passed for {symbol}")

        return ValidationResult(is_valid=is_valid, errors=errors, warnings=warnings, info=info)

    def validate_or_raise(self, quotes: Sequence[HistoricQuote], symbol: str) -> ValidationResult:
        """
        Validate quotes and raise if validation fails.

        Raises:
            ValueError: If validation fails
        """
        result = self.validate(quotes, symbol)

        if not result.is_valid:
            raise ValueError(f"Validation failed for {symbol}:\n{result}")

        return result
