"""
API services package.
"""
