"""Conformance suite package.

Loads ``|``-delimited test-case files, validates them line by line and runs
the classifier against every enabled case.
"""
