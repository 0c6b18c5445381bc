"""模块说明：base。"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class SearchResult:
    """类说明：SearchResult。找到时 url 非空，未找到时 reason 记录原因。"""
    url: str = ""
    reason: str = ""

    @property
    def found(self) -> bool:
        """函数说明：found。"""
        return bool(self.url)

    @classmethod
    def hit(cls, url: str) -> "SearchResult":
        return cls(url=url)

    @classmethod
    def miss(cls, reason: str) -> "SearchResult":
        return cls(reason=reason)


class SearchProvider(ABC):
    """类说明：SearchProvider。"""

    @abstractmethod
    async def search(self, keyword: str) -> SearchResult:
        """异步函数说明：search。任何失败都应折叠为 SearchResult.miss，不抛异常。"""
        pass
