"""
Core domain model, matrix algorithms and request contracts.

Independent of any UI: the calculator shell supplies matrices as grids of
numbers and consumes a matrix, a scalar or a typed error.
"""
