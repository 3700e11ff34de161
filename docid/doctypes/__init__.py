"""Document type package.

The closed enumeration of identifier types, their normalized-value patterns
and the secondary validators layered on top of those patterns.
"""
