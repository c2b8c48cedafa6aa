"""Core functionality for the Hue REST client.

This package contains:
- runtime: Process-wide runtime guard and context creation
- controller: HueRestContext, one connection per bridge
- engine: Single request/response exchange and response classification
- operations: Registration, entertainment groups, streaming, whitelist
- buffers: Request/response buffers of the in-flight exchange
- cache: Result cache for listing operations
- config: Bridge settings from environment and user config file
- debug: Debug levels and the default click-based sink
"""
