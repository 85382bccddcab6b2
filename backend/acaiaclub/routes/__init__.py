# Routes package init
"""
Acaia Club Backend — API Routes Package
========================================

What:  HTTP route handlers, one module per area.

Route Inventory:
    - health.py:           GET  /health
    - auth.py:             POST/DELETE /api/auth, GET /api/session
    - workstations.py:     /api/workstations
    - floor_plans.py:      /api/floorplans, /api/venue-objects, /api/storage-locations
    - vinyl.py:            /api/vinyl-slots, /api/vinyl-records
    - dj_sessions.py:      /api/djsessions
    - purchasing.py:       /api/suppliers, /api/purchase-orders
    - company_clients.py:  /api/company-clients

Design Principle:
    Routes are THIN. Each handler takes a validated body (FastAPI + pydantic),
    makes exactly one service call and wraps the result in ApiResponse.
    Errors are raised, never returned; error_handlers.py picks the status.
"""
