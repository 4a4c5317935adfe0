"""
Blind Quote - roller-blind quoting engine.

Line-item state, drive accessory configuration and order-level accessory
pricing for the quote editor.
"""
from .bootstrap import ApplicationBuilder, QuoteSession

__all__ = ["ApplicationBuilder", "QuoteSession"]
