"""Engine components orchestrating dispatch → fetch → dedup → match → export."""

from .aggregator import ResultAggregator
from .channel import Channel, ChannelClosed
from .dedup import SeenSet, fingerprint
from .dispatcher import Dispatcher, TargetSource
from .fetcher import ContentFetcher, FetchResult, is_remote
from .matcher import Finding, MatchEngine
from .pool import WorkerPool, WorkerStats
from .signatures import Signature, SignatureLibrary

__all__ = [
    "Channel",
    "ChannelClosed",
    "ContentFetcher",
    "Dispatcher",
    "FetchResult",
    "Finding",
    "MatchEngine",
    "ResultAggregator",
    "SeenSet",
    "Signature",
    "SignatureLibrary",
    "TargetSource",
    "WorkerPool",
    "WorkerStats",
    "fingerprint",
    "is_remote",
]
