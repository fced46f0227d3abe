# searchrank/_singletons.py
from functools import lru_cache
from .sources import load_sources

@lru_cache(maxsize=1)
def get_sources():
    return load_sources()
