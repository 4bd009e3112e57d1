"""Triangle-mesh approximation of PPM images, simplified by edge collapse and drawn as HTML/SVG."""

__version__ = "0.1.0"

__all__ = ["geometry", "image", "priority_queue", "elements", "mesh", "output", "cli"]