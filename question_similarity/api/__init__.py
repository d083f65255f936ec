"""
HTTP surface for the similarity engine.
"""
