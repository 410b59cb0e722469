"""
Test suite for Vessel

Contains:
- tests/unit/          : Unit tests for individual modules and transfer scenarios
"""
