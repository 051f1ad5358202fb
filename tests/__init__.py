"""
Test suite for the stablecoin ledger

Contains:
- tests/unit/      : Unit tests for individual modules
- tests/constants  : Reference scenario and participant addresses
"""
