"""
Content catalog layer.

Responsibilities:
- Define the searchable item schema and its per-category payloads.
- Load the catalog dataset from disk into validated items.
- Hold the lookup tables shared by personalization and recommendations.
"""
