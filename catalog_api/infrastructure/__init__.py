"""Infrastructure Layer — database, credential verification and logging.

Invariants:
    - Infrastructure implements core/repository_protocols.py; core never imports it
    - Driver and library exceptions are mapped to CatalogError subclasses here

Design Decisions:
    - One module per external concern (ADR: single responsibility)
"""
