"""Utility functions for QT-Miner."""

from .device import (
    get_default_device,
    parse_device
)

__all__ = [
    # Device management
    'get_default_device',
    'parse_device'
]
