"""Rendering adapters - Implementations of RenderSinkPort.

Available implementations:
- FoliumRouteRenderer: Folium-based interactive route map
- LoggingRenderSink: Log-only sink
- CompositeRenderSink: Fan-out to several sinks
"""

from .composite import CompositeRenderSink
from .folium_adapter import FoliumRouteRenderer
from .logging_sink import LoggingRenderSink

__all__ = ["CompositeRenderSink", "FoliumRouteRenderer", "LoggingRenderSink"]
