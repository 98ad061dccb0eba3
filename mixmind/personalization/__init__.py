"""
Personalization package.

Responsibilities:
- Build a weighted preference profile from onboarding answers
- Apply explicit profile edits and behavioural signals
"""
