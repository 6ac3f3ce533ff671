"""
Test suite for the token rate converter

Contains:
- tests/unit/          : Unit tests for individual modules and converter scenarios
"""
