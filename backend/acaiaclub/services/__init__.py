# Services package init
"""
Acaia Club Backend — Services Layer
====================================

What:  Persistence and business rules between routes (HTTP) and the database.
Why:   Routes handle HTTP; services own queries, orderings, eager loading,
       cross-field rules and the translation of database failures into
       application exceptions.

Service Inventory:
    - CrudService (crud.py): generic list/get/create/update/delete gateway
    - floor_plan_service.py: floor plans, venue objects, storage locations, workstations
    - vinyl_service.py: library slots, records, DJ sessions and tracks
    - purchasing_service.py: suppliers, purchase orders (totals, RECEIVED stamp)
    - company_client_service.py: company clients and the sales-stage action
    - auth_service.py: bcrypt PIN hashing and PIN login
    - session_service.py: signed-cookie session load/persist/destroy + require_user

Services are stateless singletons: each call receives the request's
AsyncSession, so there is no shared mutable state between requests.
"""
