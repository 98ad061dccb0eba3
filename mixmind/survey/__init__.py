"""
Onboarding survey package.

Responsibilities:
- Define the static, ordered onboarding question catalog.
- Read raw survey answers tolerantly (missing or malformed answers never raise).
- Place a new user: skill level, content track, starting module and session length.
"""
