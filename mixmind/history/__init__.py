"""
Search history package.

Responsibilities:
- Keep a de-duplicated, newest-first log of queries.
- Track trending queries over a rolling window.
- Produce query suggestions and usage analytics.
"""
