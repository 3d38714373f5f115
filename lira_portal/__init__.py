"""
LIRA University intern portal API.
"""
