"""
Core domain models, fixed-point primitives, errors and contracts.

This module contains the foundational building blocks that are independent
of external systems (price feeds, settlement layer, etc.).
"""
