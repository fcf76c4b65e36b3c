"""
Examples of using the eodhist clients.

Requires an API token in EODHD_API_TOKEN or ~/.eodhistrc. The free tier
allows 20 requests per day; this script issues six.
"""

import asyncio
from datetime import date

from eodhist import (
    EodHistClient,
    EodHistConnector,
    HttpError,
    QuoteValidator,
    records_to_frame,
)

# ============================================================================
# EXAMPLE 1: Async connector, several requests concurrently
# ============================================================================


async def fetch_aapl():
    async with EodHistConnector() as connector:
        return await asyncio.gather(
            connector.get_latest_quote('AAPL', exchange='US'),
            connector.get_quote_history('AAPL.US', start=date(2020, 1, 1), end=date(2020, 1, 31)),
            connector.get_dividend_history('AAPL.US', start=date(2020, 1, 1)),
        )


print("=" * 70)
print("EXAMPLE 1: Async connector")
print("=" * 70)

quote, history, dividends = asyncio.run(fetch_aapl())
print(f"\n{quote.code}: {quote.close} ({quote.change_p:+.2f}%) at {quote.as_datetime:%Y-%m-%d %H:%M} UTC")
print(f"January 2020: {len(history)} trading days, {history[0].date} to {history[-1].date}")
print(f"Dividends since 2020: {len(dividends)}")

# ============================================================================
# EXAMPLE 2: Blocking client and DataFrames
# ============================================================================

print("\n" + "=" * 70)
print("EXAMPLE 2: Blocking client")
print("=" * 70)

with EodHistClient() as client:
    splits = client.get_split_history('AAPL.US')
    weekly = client.get_quote_history('AAPL.US', start='2020-01-01', end='2020-03-31', period='w', fmt='csv')

for split in splits:
    print(f"  {split.date}: {split.numerator:g}-for-{split.denominator:g}")

df = records_to_frame(weekly)
print(f"\nWeekly closes:\n{df[['close', 'adjusted_close']].head()}")

# ============================================================================
# EXAMPLE 3: Validation and errors
# ============================================================================

print("\n" + "=" * 70)
print("EXAMPLE 3: Validation and errors")
print("=" * 70)

print(QuoteValidator().validate(history, 'AAPL.US'))

try:
    with EodHistClient(api_token='invalid') as client:
        client.get_latest_quote('AAPL.US')
except HttpError as e:
    print(f"\nInvalid token rejected with HTTP {e.status_code}")
