"""Authenticated Binance proxy for prices, balances and daily hedge volume."""

__version__ = "0.1.0"
