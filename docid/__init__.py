"""Document identifier classification.

Classifies short free-form strings into a closed set of document identifier
types (passport, driver's license, VIN, ...) and runs table-driven
conformance suites against the classifier.
"""

__version__ = "0.1.0"
