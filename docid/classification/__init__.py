"""Classification package.

Turns raw free-form text into a ``(DocumentType, normalized value)`` pair by
trying each registered type's normalizer and pattern in priority order.
"""
