"""Data models for the Hue REST client.

This package contains:
- errors: Bridge error codes and client misuse exceptions
- outcome: Tagged result of a bridge exchange
- types: Entertainment areas, whitelist entries and config records
"""
