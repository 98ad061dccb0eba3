"""
Search package.

Responsibilities:
- Hold the mutable, copy-on-write item index.
- Match, filter and sort items for free-text queries.
- Report filter facets and optionally reorder results for a profile.
"""
