"""
Test suite for positive-decimal

Contains:
- tests/unit/          : Unit tests for individual modules
"""
