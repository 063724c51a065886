"""
Readly Backend: Application Package
====================================

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Query Shapes)     │  ← sort/limit/filter, error mapping
    ├─────────────────────────────────────┤
    │        Schemas (API Contract)       │  ← Pydantic request/ack models
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async pymongo client
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
