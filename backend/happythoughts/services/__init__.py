# Services package init
"""
Happy Thoughts API — Services Layer
====================================

Service Inventory:
    - QueryFilterBuilder (filters.py): query parameters → WHERE predicates
    - ResourceService: shared list/get/create/update/delete/like
    - ThoughtService, DogService: per-entity declarations on top of it
    - UserService: registration, login, access-token lookup
    - seed.reset_database: wipe and reseed at startup

Services are built once in create_app() and stored on app.state; each call
receives the request's AsyncSession.
"""
