"""Bakery production forecasting and order recommendation backend."""
