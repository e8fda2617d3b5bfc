import threading

from eink_image.config import ConversionSettings
from eink_image.infrastructure.cache import ResponseCache, cache_key


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_response_cache_eviction_limit():
    clock = FakeClock()
    cache = ResponseCache(ttl=60, max_entries=16, clock=clock)

    for idx in range(20):
        clock.now += 1
        cache.put(f"key-{idx}", b"data")

    assert len(cache._entries) == 16
    # Ensure the oldest entries are evicted first
    assert "key-0" not in cache._entries
    assert "key-3" not in cache._entries
    assert "key-4" in cache._entries


def test_response_cache_expires_entries():
    clock = FakeClock()
    cache = ResponseCache(ttl=5, max_entries=4, clock=clock)
    cache.put("key", b"png")

    clock.now += 5
    assert cache.get("key") == b"png"

    clock.now += 0.5
    assert cache.get("key") is None
    assert "key" not in cache._entries


def test_zero_ttl_disables_caching():
    cache = ResponseCache(ttl=0, max_entries=4)
    cache.put("key", b"png")

    assert cache.get("key") is None


def test_cache_key_depends_on_source_and_settings():
    base = cache_key("http://a/img.png", ConversionSettings())

    assert base == cache_key("http://a/img.png", ConversionSettings())
    assert base != cache_key("http://b/img.png", ConversionSettings())
    assert base != cache_key("http://a/img.png", ConversionSettings(threshold=100))


def test_concurrent_puts_respect_the_limit():
    cache = ResponseCache(ttl=60, max_entries=8)

    def writer(prefix):
        for idx in range(200):
            cache.put(f"{prefix}-{idx}", b"data")
            cache.get(f"{prefix}-{idx // 2}")

    threads = [threading.Thread(target=writer, args=(name,)) for name in "abcd"]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(cache._entries) == 8
