"""
Recommendation engine.

Responsibilities:
- Score catalog recipes against a personalization profile.
- Suggest spirit brands, a learning path and ranked mood categories.
- Cache recommendation sets per (profile, catalog version).
"""
