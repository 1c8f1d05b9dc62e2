"""
Pizza Zone CLI - Command-line interface for delivery zone checks.

Usage:
    pizza-zone check 47.9184 106.9177
    pizza-zone address "Сүхбаатар дүүрэг"
    pizza-zone estimate 1.2
    pizza-zone --config config/pizza_zone/zone_config.yaml show-config
"""

__version__ = "1.0.0"
