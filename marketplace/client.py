"""
eBay 搜索客户端

Browse API 用于在售商品 (导入图鉴), Marketplace Insights API 用于已售商品 (估价)。
任何失败都只记日志并返回空列表: 调用方应把空结果理解为"暂时不可用", 而不是"没有商品"。
"""
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

import requests
from loguru import logger

from marketplace.errors import MarketplaceAuthError, UpstreamUnavailable

SANDBOX_BASE_URL = 'https://api.sandbox.ebay.com'
PRODUCTION_BASE_URL = 'https://api.ebay.com'

BROWSE_SEARCH_PATH = '/buy/browse/v1/item_summary/search'
SOLD_SEARCH_PATH = '/buy/marketplace_insights/v1_beta/item_sales/search'


def parse_price(value) -> Optional[float]:
    """解析价格字符串, 无法解析时返回 None"""
    if value is None:
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    return price if math.isfinite(price) else None


def parse_date(value) -> Optional[datetime]:
    """解析 ISO-8601 时间 (eBay 使用 'Z' 后缀)"""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
    except ValueError:
        return None
    # 统一为带时区的 UTC 时间, 保证可以排序
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _image_url(entry):
    if isinstance(entry, dict):
        return entry.get('imageUrl')
    if isinstance(entry, str):
        return entry
    return None


def _as_list(value):
    return value if isinstance(value, list) else []


@dataclass
class ItemSummary:
    """搜索结果中的一件商品"""
    item_id: str
    title: str
    price: Optional[float] = None
    currency: Optional[str] = None
    image_url: Optional[str] = None
    image_urls: List[str] = field(default_factory=list)
    end_date: Optional[datetime] = None
    item_web_url: Optional[str] = None
    condition: Optional[str] = None

    @classmethod
    def from_json(cls, data: dict) -> 'ItemSummary':
        """把 eBay itemSummary JSON 映射为内部结构"""
        price = data.get('price')
        if not isinstance(price, dict):
            price = {}

        image_urls = []
        for entry in [data.get('image')] + _as_list(data.get('thumbnailImages')) \
                + _as_list(data.get('additionalImages')):
            url = _image_url(entry)
            if url and url not in image_urls:
                image_urls.append(url)

        return cls(
            item_id=str(data.get('itemId') or ''),
            title=str(data.get('title') or ''),
            price=parse_price(price.get('value')),
            currency=price.get('currency'),
            image_url=image_urls[0] if image_urls else None,
            image_urls=image_urls,
            end_date=parse_date(data.get('itemEndDate')),
            item_web_url=data.get('itemWebUrl'),
            condition=data.get('condition'),
        )

    def to_dict(self):
        return {
            'itemId': self.item_id,
            'title': self.title,
            'price': {'value': self.price, 'currency': self.currency},
            'imageUrl': self.image_url,
            'imageUrls': self.image_urls,
            'itemEndDate': self.end_date.isoformat() if self.end_date else None,
            'itemWebUrl': self.item_web_url,
            'condition': self.condition,
        }


class MarketplaceClient:
    """eBay 搜索客户端"""

    def __init__(self, token_cache, base_url=SANDBOX_BASE_URL, session=None,
                 marketplace_id='EBAY_US', query_prefix='Disney pin',
                 category_id='50310', timeout=10):
        self.token_cache = token_cache
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': 'Pin-Tracker/1.0'
        })
        self.marketplace_id = marketplace_id
        self.query_prefix = query_prefix
        self.category_id = category_id
        self.timeout = timeout

    def build_query(self, query: str) -> str:
        """在搜索词前加上固定的分类限定词"""
        query = (query or '').strip()
        if not self.query_prefix:
            return query
        return f"{self.query_prefix} {query}".strip()

    def search(self, query: str, limit: int = 10, filters: dict = None) -> List[ItemSummary]:
        """
        搜索在售商品 (Browse API)

        Args:
            query: 搜索词
            limit: 最大返回数量
            filters: 额外的查询参数

        Returns:
            ItemSummary 列表, 失败时为空列表
        """
        params = {'fieldgroups': 'EXTENDED'}
        params.update(filters or {})
        return self._search(BROWSE_SEARCH_PATH, query, limit, params)

    def search_sold(self, query: str, limit: int = 20, filters: dict = None) -> List[ItemSummary]:
        """搜索已售商品 (Marketplace Insights API)"""
        params = {'filter': 'soldItems:true'}
        params.update(filters or {})
        return self._search(SOLD_SEARCH_PATH, query, limit, params)

    def _search(self, path, query, limit, params):
        try:
            data = self._get(path, dict(params, q=self.build_query(query), limit=limit))
        except (MarketplaceAuthError, UpstreamUnavailable) as e:
            logger.error(f"eBay search failed for {query!r}: {e}")
            return []

        summaries = data.get('itemSummaries') or []
        if not isinstance(summaries, list):
            logger.error(f"eBay search failed for {query!r}: itemSummaries is not a list")
            return []

        items = [ItemSummary.from_json(s) for s in summaries if isinstance(s, dict)]
        logger.debug(f"eBay search {query!r}: {len(items)} items")
        return items

    def _get(self, path, params):
        """带令牌的 GET 请求, 返回 JSON 字典"""
        if self.category_id:
            params.setdefault('category_ids', self.category_id)

        headers = {
            'Authorization': f"Bearer {self.token_cache.get_token()}",
            'Content-Type': 'application/json',
            'X-EBAY-C-MARKETPLACE-ID': self.marketplace_id,
        }

        try:
            response = self.session.get(
                f"{self.base_url}{path}", params=params, headers=headers, timeout=self.timeout
            )
            if response.status_code == 401:
                # 令牌被服务端提前作废
                self.token_cache.invalidate()
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise UpstreamUnavailable(str(e)) from e
        except ValueError as e:
            raise UpstreamUnavailable(f"Invalid JSON from eBay: {e}") from e

        if not isinstance(data, dict):
            raise UpstreamUnavailable('Unexpected eBay response body')
        return data
