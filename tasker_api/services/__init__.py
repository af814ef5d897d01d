"""Services Layer — resource controllers (profiles, tasks, payments, users, auth).

Invariants:
    - One handler class per resource, constructed per request with its collaborators
    - Handlers raise TaskerError subclasses; the API layer renders them

Design Decisions:
    - Controllers depend on core Protocols only (Store, Geocoder), never on SQLAlchemy
"""
