"""
ModWatch 统一异常体系

提供分层的异常结构，支持错误代码、上下文信息和 JSON 序列化。
"""

from typing import Any, Dict, Optional


class ModWatchError(Exception):
    """ModWatch 基础异常类"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self._get_default_code()
        self.context = context or {}

    def _get_default_code(self) -> str:
        return "E000"

    def to_dict(self) -> Dict[str, Any]:
        """将异常转换为字典格式"""
        return {
            "error": True,
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message


class ConfigError(ModWatchError):
    """配置相关错误"""

    def _get_default_code(self) -> str:
        return "E100"


class ConfigParseError(ConfigError):
    """配置解析错误"""

    def _get_default_code(self) -> str:
        return "E101"


class ConfigValidationError(ConfigError):
    """配置验证错误"""

    def _get_default_code(self) -> str:
        return "E102"


class APIError(ModWatchError):
    """
    API 相关错误

    status 为远端返回的 HTTP 状态码，传输层错误时为 None。
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        status: Optional[int] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message, code, context)
        self.status = status
        self.url = url
        if status is not None:
            self.context["status_code"] = status
        if url:
            self.context["url"] = url

    def _get_default_code(self) -> str:
        return "E200"


class APINotFoundError(APIError):
    """API 资源不存在"""

    def _get_default_code(self) -> str:
        return "E404"


class APIRateLimitError(APIError):
    """API 速率限制"""

    def _get_default_code(self) -> str:
        return "E429"


class APIServerError(APIError):
    """API 服务器错误"""

    def _get_default_code(self) -> str:
        return "E500"


class FetchError(ModWatchError):
    """版本列表获取失败（重试之后）"""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        attempts: int = 0,
    ):
        super().__init__(message, code, context)
        self.attempts = attempts
        self.context.setdefault("attempts", attempts)

    def _get_default_code(self) -> str:
        return "E300"


class TransientFetchError(FetchError):
    """可重试错误在重试次数耗尽后仍然失败"""

    def _get_default_code(self) -> str:
        return "E301"


class PermanentFetchError(FetchError):
    """不可重试的获取错误（404、响应格式错误等）"""

    def _get_default_code(self) -> str:
        return "E302"


class StoreError(ModWatchError):
    """模组目录或服务端配置无法读写"""

    def _get_default_code(self) -> str:
        return "E400"


class CheckCancelledError(ModWatchError):
    """更新检查被取消"""

    def _get_default_code(self) -> str:
        return "E501"


__all__ = [
    # 基础异常
    "ModWatchError",
    # 配置异常
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    # API 异常
    "APIError",
    "APINotFoundError",
    "APIRateLimitError",
    "APIServerError",
    # 获取异常
    "FetchError",
    "TransientFetchError",
    "PermanentFetchError",
    # 存储异常
    "StoreError",
    # 检查流程
    "CheckCancelledError",
]
