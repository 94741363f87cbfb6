from fetchcache.utils.serialization import dumps, loads
from fetchcache.utils.strings import to_snake

__all__ = ["dumps", "loads", "to_snake"]
