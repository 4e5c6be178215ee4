"""pinconnect — location-sharing backend.

Users sign up, drop pins on the map, and link their pins into named
shapes ("connects"). This package holds the auth engine, the
ownership-scoped pin/connect services, their PostGIS storage adapters
and a thin FastAPI surface.
"""

__version__ = "0.1.0"
