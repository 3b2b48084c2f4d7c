"""
API 客户端

Modrinth API 的异步客户端，负责请求发送与状态码到异常的映射。
重试策略不在这里，由 RetryingFetcher 负责。
"""

import asyncio
import json
from typing import Any, Dict, List, Optional

import aiohttp
from loguru import logger

from modwatch.models import ProjectInfo, RemoteVersion
from modwatch.models.config import DEFAULT_USER_AGENT, MODRINTH_BASE_URL
from modwatch.exceptions import (
    APIError,
    APINotFoundError,
    APIRateLimitError,
    APIServerError,
)


class ModrinthClient:
    """Modrinth API 客户端"""

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        base_url: str = MODRINTH_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        request_timeout: float = 10.0,
    ):
        self._session = session
        self._owned_session = session is None
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.request_timeout = request_timeout

    @property
    def session(self) -> aiohttp.ClientSession:
        """获取或创建 aiohttp session"""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": self.user_agent},
                timeout=aiohttp.ClientTimeout(total=self.request_timeout),
            )
            self._owned_session = True
        return self._session

    def _raise_for_status(self, status: int, url: str):
        """把非 200 状态码映射为对应的异常"""
        message = f"API 请求失败 (状态码: {status})"
        if status == 404:
            raise APINotFoundError(message, status=status, url=url)
        if status == 429:
            raise APIRateLimitError(message, status=status, url=url)
        if status >= 500:
            raise APIServerError(message, status=status, url=url)
        raise APIError(message, status=status, url=url)

    async def _request(self, endpoint: str, params: Optional[dict] = None) -> Any:
        """发送 API 请求"""
        url = f"{self.base_url}{endpoint}"
        logger.debug(f"[API] GET {url} {params or ''}")
        async with self.session.get(url, params=params) as response:
            if response.status != 200:
                self._raise_for_status(response.status, str(response.url))
            try:
                return await response.json(content_type=None)
            except ValueError as e:
                raise APIError(
                    "API 响应不是有效的 JSON",
                    status=response.status,
                    url=str(response.url),
                ) from e

    async def get_project(self, idx: str) -> ProjectInfo:
        """获取项目信息"""
        response = await self._request(f"/project/{idx}")
        if not isinstance(response, dict):
            raise APIError("项目信息格式错误", context={"project": idx})
        return ProjectInfo.from_modrinth(response)

    async def get_project_versions(
        self,
        idx: str,
        loaders: Optional[List[str]] = None,
        game_versions: Optional[List[str]] = None,
    ) -> List[RemoteVersion]:
        """
        获取项目的版本列表

        Args:
            idx: 项目 ID 或 slug
            loaders: 只返回支持这些加载器的版本
            game_versions: 只返回支持这些游戏版本的版本

        Returns:
            远端版本列表（可能为空）
        """
        params: Dict[str, str] = {}
        if loaders:
            params["loaders"] = json.dumps(loaders)
        if game_versions:
            params["game_versions"] = json.dumps(game_versions)

        response = await self._request(f"/project/{idx}/version", params or None)
        if response is None:
            return []
        if not isinstance(response, list):
            raise APIError("版本列表格式错误", context={"project": idx})
        return [RemoteVersion.from_modrinth(version) for version in response]

    async def get_version(self, version_id: str) -> RemoteVersion:
        """获取单个版本详情"""
        response = await self._request(f"/version/{version_id}")
        if not isinstance(response, dict):
            raise APIError("版本信息格式错误", context={"version": version_id})
        return RemoteVersion.from_modrinth(response)

    async def get_versions(self, version_ids: List[str]) -> List[RemoteVersion]:
        """
        并行获取多个版本详情

        Modrinth 没有对应的批量接口，逐个请求；失败的版本会被丢弃。
        """

        async def fetch(version_id: str) -> Optional[RemoteVersion]:
            try:
                return await self.get_version(version_id)
            except (APIError, aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.warning(f"[API] 获取版本 {version_id} 失败: {e}")
                return None

        results = await asyncio.gather(*(fetch(vid) for vid in version_ids))
        return [result for result in results if result is not None]

    async def search_mods(
        self,
        query: str,
        game_version: Optional[str] = None,
        loader: Optional[str] = None,
        limit: int = 20,
    ) -> List[Dict[str, Any]]:
        """搜索模组，返回搜索结果中的 hits"""
        facets = []
        if game_version:
            facets.append([f"versions:{game_version}"])
        if loader:
            facets.append([f"categories:{loader}"])

        params: Dict[str, Any] = {"query": query, "limit": limit}
        if facets:
            params["facets"] = json.dumps(facets)

        response = await self._request("/search", params)
        if not isinstance(response, dict):
            raise APIError("搜索结果格式错误", context={"query": query})
        return response.get("hits", [])

    async def close(self):
        """关闭客户端"""
        if self._owned_session and self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
