from functools import lru_cache

from codelens.analyzer.analyzer import Analyzer


@lru_cache(maxsize=1)
def get_analyzer() -> Analyzer:
    return Analyzer()
