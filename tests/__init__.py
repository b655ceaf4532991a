"""
Test suite for matcalc

Contains:
- tests/unit/          : Unit tests for the matrix model, operations,
                         elimination, contracts and calculator
"""
