"""Conversion between WBZ, WU8 and U8 Mario Kart Wii track archives."""

__version__ = "0.1.0"