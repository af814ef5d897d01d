"""Infrastructure Layer — database, store, external clients and cross-cutting concerns.

Invariants:
    - Infrastructure implements the core protocols; core never imports it back
    - External failures are mapped to TaskerError subclasses at this boundary
"""
