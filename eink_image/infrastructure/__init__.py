"""Infrastructure helpers for decoding, fetching and caching."""

from .cache import CACHE, ResponseCache, cache_key
from .codec import decode, decode_bytes, encode, encode_bytes, flatten
from .network import FETCHER, SourceFetcher, is_remote

__all__ = [
    "CACHE",
    "ResponseCache",
    "cache_key",
    "decode",
    "decode_bytes",
    "encode",
    "encode_bytes",
    "flatten",
    "FETCHER",
    "SourceFetcher",
    "is_remote",
]
