"""模块说明：__init__。"""

from vvbot.search.base import SearchProvider, SearchResult
from vvbot.search.zvv import ZvvSearchClient

__all__ = ["SearchProvider", "SearchResult", "ZvvSearchClient"]
