"""picvoter: image ingestion and confidence-ranked voting."""

__version__ = "0.1.0"
