"""Resource routers for API v1."""
