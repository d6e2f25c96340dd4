"""Ingestion, ranking and voting services for picvoter."""

from .ranking import Ranking, rank
from .raw_store import AdmitResult, RawStore
from .transcoder import Transcoder

__all__ = [
    "AdmitResult",
    "RawStore",
    "Ranking",
    "Transcoder",
    "rank",
]
