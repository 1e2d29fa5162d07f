"""
Core domain models, mathematical primitives, and contracts.

This module contains the foundational building blocks of the pricing core,
independent of storage, rendering and any external listing source.
"""
