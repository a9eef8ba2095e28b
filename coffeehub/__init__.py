"""CoffeeHub - product catalog API and client for coffees."""

__version__ = "1.0.0"
