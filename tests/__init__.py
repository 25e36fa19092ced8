"""
Test suite for nfa-core

Contains:
- tests/unit/          : Unit tests for individual modules and scenarios
- tests/helpers.py     : Shared addresses and collaborator fakes
"""
