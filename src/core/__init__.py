"""
Core domain models, mathematical primitives, and payload contracts.

This module contains the foundational building blocks that are independent
of the valuation rules themselves (and of any UI, rate source or storage).
"""
