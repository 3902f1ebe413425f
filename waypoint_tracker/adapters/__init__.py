"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the tracking core to external systems like:
- Route storage (JSON files, memory)
- Location permission (consent record, static)
- Location sources (IP geolocation, replayed tracks)
- Scheduling (daemon threads, manual ticks)
- Rendering engines (Folium, logging)
"""
