"""
Test suite for the fair price core

Contains:
- tests/unit/          : Unit tests for individual modules and end-to-end scenarios
"""
