"""
Products module - Product records referenced by licenses.
"""
