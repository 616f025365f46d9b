"""API Layer — FastAPI routes, dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return the {success, data?, error?} envelope, except the
      GET /project/budget/{id} success body

Design Decisions:
    - Thin routes delegate to services/project_budget.py
"""
