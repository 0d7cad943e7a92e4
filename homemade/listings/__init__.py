"""
Listings layer.

Responsibilities:
- Hold seller profiles and their food listings in memory.
- Validate create and update requests.
- Infer a category from a listing's title and description.
- Search listings by seller, text and location, with category suggestions
  when nothing nearby matches.
"""
