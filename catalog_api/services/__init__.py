"""Services Layer — catalog operations and the per-route authorization pipeline.

Invariants:
    - Services talk to IO only through core/repository_protocols.py
    - Every public service method returns a Result (Ok | Err), never raises for domain outcomes

Design Decisions:
    - Thin orchestration around pure core rules (ADR: impureim sandwich)
"""
