"""
eBay 市场价格接入 - 令牌缓存 / 搜索客户端 / 价格聚合
"""
from dataclasses import dataclass

from marketplace.aggregator import PriceAggregator, PricePoint, history_points, mean_price
from marketplace.client import (
    ItemSummary, MarketplaceClient, PRODUCTION_BASE_URL, SANDBOX_BASE_URL,
)
from marketplace.errors import MarketplaceAuthError, MarketplaceError, UpstreamUnavailable
from marketplace.token_cache import PRODUCTION_AUTH_URL, SANDBOX_AUTH_URL, TokenCache


@dataclass
class Marketplace:
    """进程内唯一的一组市场组件, 由应用工厂创建后注入"""
    token_cache: TokenCache
    client: MarketplaceClient
    aggregator: PriceAggregator


def build_marketplace(config, session=None, clock=None) -> Marketplace:
    """
    根据配置组装令牌缓存、客户端和聚合器

    Args:
        config: 类字典配置 (Flask app.config)
        session: 可选的 requests.Session (测试时替换)
        clock: 可选的时钟函数
    """
    sandbox = config.get('EBAY_SANDBOX', True)
    timeout = config.get('MARKETPLACE_TIMEOUT', 10)

    token_kwargs = {}
    if clock is not None:
        token_kwargs['clock'] = clock

    token_cache = TokenCache(
        config.get('EBAY_APP_ID'),
        config.get('EBAY_CERT_ID'),
        auth_url=SANDBOX_AUTH_URL if sandbox else PRODUCTION_AUTH_URL,
        session=session,
        timeout=timeout,
        **token_kwargs
    )
    client = MarketplaceClient(
        token_cache,
        base_url=SANDBOX_BASE_URL if sandbox else PRODUCTION_BASE_URL,
        session=session,
        marketplace_id=config.get('EBAY_MARKETPLACE_ID', 'EBAY_US'),
        query_prefix=config.get('MARKETPLACE_QUERY_PREFIX', 'Disney pin'),
        category_id=config.get('MARKETPLACE_CATEGORY_ID', '50310'),
        timeout=timeout,
    )
    return Marketplace(token_cache=token_cache, client=client, aggregator=PriceAggregator(client))


__all__ = [
    'Marketplace', 'build_marketplace',
    'TokenCache', 'MarketplaceClient', 'ItemSummary',
    'PriceAggregator', 'PricePoint', 'mean_price', 'history_points',
    'MarketplaceError', 'MarketplaceAuthError', 'UpstreamUnavailable',
]
