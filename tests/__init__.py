"""
Test suite for the customs valuation engine

Contains:
- tests/unit/          : Unit tests for individual modules
"""
