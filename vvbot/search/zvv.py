"""模块说明：zvv。基于 zvv.quest 的语录图片搜索。"""

import httpx
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from vvbot.search.base import SearchProvider, SearchResult

DEFAULT_API_BASE = "https://api.zvv.quest"


class SearchResponse(BaseModel):
    """类说明：SearchResponse。"""
    code: int = 0
    data: list[str] = Field(default_factory=list)
    msg: str = ""


class ZvvSearchClient(SearchProvider):
    """类说明：ZvvSearchClient。"""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_base: str = DEFAULT_API_BASE,
    ):
        self.client = client
        self.api_base = api_base.rstrip("/")

    @property
    def search_url(self) -> str:
        return f"{self.api_base}/search"

    async def search(self, keyword: str) -> SearchResult:
        """异步函数说明：search。只取第一条结果。"""
        # 关键词由 httpx 负责 URL 编码
        params = {"q": keyword, "n": 1}
        try:
            resp = await self.client.get(self.search_url, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Error making request to zvv.quest: {e}")
            return SearchResult.miss(f"request failed: {e}")

        if resp.status_code != httpx.codes.OK:
            logger.warning(f"zvv.quest returned non-200 status: {resp.status_code}")
            return SearchResult.miss(f"http status {resp.status_code}")

        try:
            body = SearchResponse.model_validate_json(resp.content)
        except ValidationError as e:
            logger.error(f"Error parsing zvv.quest JSON response: {e}")
            return SearchResult.miss("malformed response")

        if body.code >= 400 or not body.data:
            logger.info(f"zvv.quest returned error code or no data: code={body.code}, msg={body.msg}")
            return SearchResult.miss(f"code={body.code}, msg={body.msg}")

        return SearchResult.hit(body.data[0])
