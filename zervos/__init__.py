"""Client-side state layer for the Zervos bookings dashboard."""

from .core.config import VERSION as __version__
