"""
Reverse geocoding.

Responsibilities:
- Turn a browser's latitude/longitude into a zip code, city and state.
- Try BigDataCloud first, then Nominatim.
- Fall back to the nearest zip in the local table when both come up empty.
"""
