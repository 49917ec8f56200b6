"""
Generic helper functions.

Includes numeric interpolation/range-mapping helpers (math) and
prototype-style class linking plus mapping merges (objects).
"""
