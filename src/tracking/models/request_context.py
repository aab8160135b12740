"""
请求上下文模型

描述一次待判定的 HTTP 请求。宿主环境的状态判断(是否为 feed、是否已登录等)
以显式标志传入，判定过程不读取任何全局状态。
所有模型使用Pydantic进行数据验证。
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RequestFlags(BaseModel):
    """
    宿主环境提供的请求标志

    任一标志为 True 时该请求不计入访问统计。
    """
    model_config = ConfigDict(frozen=True)

    is_feed: bool = Field(default=False, description="RSS/Atom 订阅请求")
    is_trackback: bool = Field(default=False, description="Trackback 请求")
    is_404: bool = Field(default=False, description="页面不存在")
    is_robots: bool = Field(default=False, description="robots.txt 请求")
    is_user_logged_in: bool = Field(default=False, description="当前用户已登录")
    is_preview: bool = Field(default=False, description="内容预览")
    is_search: bool = Field(default=False, description="站内搜索结果页")


class RequestContext(BaseModel):
    """
    单次请求的判定输入

    缺失的字段一律视为空值，不会抛出异常。
    """
    model_config = ConfigDict(frozen=True)

    target_path: str = Field(default="", description="规范化后的请求路径")
    referrer: Optional[str] = Field(default=None, description="原始 Referer 头")
    user_agent: Optional[str] = Field(default=None, description="原始 User-Agent 头")
    flags: RequestFlags = Field(default_factory=RequestFlags, description="宿主环境标志")

    @field_validator("target_path", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> str:
        """None 视为无目标"""
        return "" if v is None else v

    @field_validator("referrer", "user_agent", mode="before")
    @classmethod
    def _blank_to_none(cls, v: Any) -> Optional[str]:
        """空字符串视为缺失"""
        if v is None or v == "":
            return None
        return v

    @property
    def has_target(self) -> bool:
        """是否有有效的请求路径"""
        return bool(self.target_path)

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, Any],
        flags: Optional[RequestFlags] = None,
    ) -> RequestContext:
        """
        从 WSGI/CGI 风格的环境变量映射创建上下文

        请求路径优先取 REQUEST_URI，没有时由 PATH_INFO 和 QUERY_STRING 拼接。

        Args:
            environ: 请求环境映射
            flags: 宿主环境标志，默认全部为 False

        Returns:
            RequestContext 实例
        """
        target = environ.get("REQUEST_URI")
        if not target:
            target = environ.get("PATH_INFO") or ""
            query = environ.get("QUERY_STRING")
            if target and query:
                target = f"{target}?{query}"

        return cls(
            target_path=target,
            referrer=environ.get("HTTP_REFERER"),
            user_agent=environ.get("HTTP_USER_AGENT"),
            flags=flags or RequestFlags(),
        )
