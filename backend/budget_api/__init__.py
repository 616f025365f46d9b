"""Capital Project Budget API — stores project budgets and converts them between currencies.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
