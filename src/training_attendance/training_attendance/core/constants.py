"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_METERS = 6_371_000.0

# Absorbs floating-point round-off so a trainee exactly on the fence is admitted.
GEOFENCE_TOLERANCE_METERS = 1e-6

DEFAULT_RADIUS_METERS = 30
DEFAULT_TOKEN_BYTES = 9
MAX_TOKEN_ATTEMPTS = 8

DEFAULT_ROSTER_POLL_SECONDS = 3.0
DEFAULT_EVENT_SERVICE_TIMEOUT = 10.0
