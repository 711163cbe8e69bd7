"""
市场 API 错误类型
"""


class MarketplaceError(Exception):
    """市场 API 错误基类"""


class MarketplaceAuthError(MarketplaceError):
    """OAuth 令牌获取失败 (凭据无效或认证端点不可达)"""


class UpstreamUnavailable(MarketplaceError):
    """搜索请求失败 (网络错误 / 非 2xx / 响应无法解析)"""
