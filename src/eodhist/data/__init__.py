"""Records, request builders, parsers and validators."""

from .models import HistoricQuote, Dividend, Split, RealTimeQuote, records_to_frame
from .endpoints import EndpointRequest

__all__ = ['HistoricQuote', 'Dividend', 'Split', 'RealTimeQuote', 'records_to_frame', 'EndpointRequest']
