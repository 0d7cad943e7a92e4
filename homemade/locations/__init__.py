"""
Location layer.

Responsibilities:
- Hold the static US zip-code table in memory.
- Resolve free-text locations ("87505", "Santa Fe, NM") to sets of zips.
- Answer radius queries over zip centroids.
- Rank location autocomplete suggestions.
"""
