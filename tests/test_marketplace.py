"""
eBay 接入测试 (单元测试，不实际请求网络)
"""
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
import requests

from marketplace import build_marketplace
from marketplace.aggregator import PriceAggregator, history_points, mean_price
from marketplace.client import ItemSummary, MarketplaceClient, parse_price
from marketplace.errors import MarketplaceAuthError
from marketplace.token_cache import TokenCache


class FakeClock:
    """可手动推进的时钟"""

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def _token_session(token='tok-1', expires_in=7200):
    session = MagicMock()
    response = MagicMock()
    response.json.return_value = {'access_token': token, 'expires_in': expires_in}
    session.post.return_value = response
    return session


def _item(price=None, end_date=None, title='Pin'):
    return ItemSummary(
        item_id='1',
        title=title,
        price=price,
        end_date=end_date
    )


class TestTokenCache:
    """令牌缓存测试"""

    def test_token_reused_until_expiry(self):
        """未过期时不重复申请"""
        clock = FakeClock()
        session = _token_session()
        cache = TokenCache('app', 'cert', session=session, clock=clock)

        assert cache.get_token() == 'tok-1'
        clock.now += 3600
        assert cache.get_token() == 'tok-1'
        assert session.post.call_count == 1

    def test_token_refreshed_inside_safety_margin(self):
        """到期前 60 秒即重新申请"""
        clock = FakeClock()
        session = _token_session(expires_in=7200)
        cache = TokenCache('app', 'cert', session=session, clock=clock)

        cache.get_token()
        clock.now += 7200 - 30
        cache.get_token()

        assert session.post.call_count == 2

    def test_token_request_uses_client_credentials(self):
        """Basic 认证 + client_credentials"""
        session = _token_session()
        cache = TokenCache('app', 'cert', session=session, clock=FakeClock())
        cache.get_token()

        kwargs = session.post.call_args.kwargs
        assert kwargs['auth'] == ('app', 'cert')
        assert kwargs['data']['grant_type'] == 'client_credentials'

    def test_unreachable_endpoint_raises_auth_error(self):
        """认证端点不可达"""
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError('down')
        cache = TokenCache('app', 'cert', session=session, clock=FakeClock())

        with pytest.raises(MarketplaceAuthError):
            cache.get_token()

    def test_rejected_credentials_raise_auth_error(self):
        """凭据被拒绝 (非 2xx)"""
        session = _token_session()
        session.post.return_value.raise_for_status.side_effect = requests.HTTPError('401')
        cache = TokenCache('app', 'cert', session=session, clock=FakeClock())

        with pytest.raises(MarketplaceAuthError):
            cache.get_token()

    def test_bad_expires_in_raises_auth_error(self):
        """expires_in 不是数字"""
        session = _token_session()
        session.post.return_value.json.return_value = {'access_token': 'tok', 'expires_in': 'soon'}
        cache = TokenCache('app', 'cert', session=session, clock=FakeClock())

        with pytest.raises(MarketplaceAuthError):
            cache.get_token()
        assert not cache.is_valid

    def test_non_object_token_body_raises_auth_error(self):
        session = _token_session()
        session.post.return_value.json.return_value = ['tok']
        cache = TokenCache('app', 'cert', session=session, clock=FakeClock())

        with pytest.raises(MarketplaceAuthError):
            cache.get_token()

    def test_missing_credentials(self):
        """未配置凭据时不发请求"""
        session = MagicMock()
        cache = TokenCache(None, None, session=session, clock=FakeClock())

        with pytest.raises(MarketplaceAuthError):
            cache.get_token()
        session.post.assert_not_called()

    def test_invalidate(self):
        session = _token_session()
        cache = TokenCache('app', 'cert', session=session, clock=FakeClock())
        cache.get_token()
        cache.invalidate()

        assert not cache.is_valid
        cache.get_token()
        assert session.post.call_count == 2


class TestItemSummary:
    """eBay JSON 映射测试"""

    def test_from_json(self):
        item = ItemSummary.from_json({
            'itemId': 'v1|123|0',
            'title': 'Disney Pin Jafar',
            'price': {'value': '12.50', 'currency': 'USD'},
            'image': {'imageUrl': 'https://img/1.jpg'},
            'thumbnailImages': [{'imageUrl': 'https://img/2.jpg'}],
            'itemEndDate': '2024-03-01T10:00:00.000Z',
        })

        assert item.item_id == 'v1|123|0'
        assert item.price == 12.5
        assert item.currency == 'USD'
        assert item.image_url == 'https://img/1.jpg'
        assert item.image_urls == ['https://img/1.jpg', 'https://img/2.jpg']
        assert item.end_date == datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc)

    def test_missing_fields(self):
        item = ItemSummary.from_json({'itemId': '1', 'title': 'x'})

        assert item.price is None
        assert item.image_url is None
        assert item.end_date is None

    def test_malformed_fields(self):
        """price 是字符串, 图片列表是对象"""
        item = ItemSummary.from_json({
            'itemId': '1',
            'title': 'x',
            'price': '5.00',
            'thumbnailImages': {'imageUrl': 'https://img/1.jpg'},
        })

        assert item.price is None
        assert item.image_urls == []

    def test_parse_price(self):
        assert parse_price('10.5') == 10.5
        assert parse_price('abc') is None
        assert parse_price(None) is None
        assert parse_price('nan') is None


class TestMarketplaceClient:
    """搜索客户端测试"""

    def _client(self, body=None, session=None):
        token_cache = MagicMock()
        token_cache.get_token.return_value = 'tok'
        if session is None:
            session = MagicMock()
            session.get.return_value.status_code = 200
            session.get.return_value.json.return_value = body or {}
        return MarketplaceClient(token_cache, base_url='https://api.test', session=session), session

    def test_search_sold_builds_query(self):
        """搜索词前加分类限定词, 带令牌和分类"""
        client, session = self._client({'itemSummaries': []})
        client.search_sold('Jafar', limit=20)

        args, kwargs = session.get.call_args
        assert args[0] == 'https://api.test/buy/marketplace_insights/v1_beta/item_sales/search'
        assert kwargs['params']['q'] == 'Disney pin Jafar'
        assert kwargs['params']['limit'] == 20
        assert kwargs['params']['category_ids'] == '50310'
        assert kwargs['params']['filter'] == 'soldItems:true'
        assert kwargs['headers']['Authorization'] == 'Bearer tok'
        assert kwargs['headers']['X-EBAY-C-MARKETPLACE-ID'] == 'EBAY_US'

    def test_search_maps_items(self):
        client, session = self._client({'itemSummaries': [
            {'itemId': '1', 'title': 'A', 'price': {'value': '5', 'currency': 'USD'}},
            {'itemId': '2', 'title': 'B', 'price': {'value': '7', 'currency': 'USD'}},
        ]})
        items = client.search('Stitch')

        assert [i.title for i in items] == ['A', 'B']
        assert session.get.call_args.args[0].endswith('/buy/browse/v1/item_summary/search')

    def test_http_error_returns_empty(self):
        """非 2xx 时返回空列表"""
        session = MagicMock()
        session.get.return_value.status_code = 500
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError('500')
        client, _ = self._client(session=session)

        assert client.search('Jafar') == []

    def test_transport_error_returns_empty(self):
        session = MagicMock()
        session.get.side_effect = requests.Timeout('slow')
        client, _ = self._client(session=session)

        assert client.search_sold('Jafar') == []

    def test_string_price_is_skipped(self):
        """价格格式不对的商品没有价格, 不抛出"""
        client, _ = self._client({'itemSummaries': [
            {'itemId': '1', 'title': 'A', 'price': '5.00'},
            {'itemId': '2', 'title': 'B', 'price': {'value': '7', 'currency': 'USD'}},
        ]})
        items = client.search_sold('Jafar')

        assert [i.price for i in items] == [None, 7.0]
        assert mean_price(items) == 7.0

    def test_summaries_not_a_list_returns_empty(self):
        client, _ = self._client({'itemSummaries': {'itemId': '1', 'price': {'value': '5'}}})

        assert client.search_sold('Jafar') == []

    def test_non_object_summaries_are_skipped(self):
        client, _ = self._client({'itemSummaries': ['junk', None, {'itemId': '1', 'title': 'A'}]})

        assert [i.title for i in client.search('Jafar')] == ['A']

    def test_token_failure_returns_empty(self):
        """令牌获取失败也不抛出"""
        client, session = self._client({'itemSummaries': []})
        client.token_cache.get_token.side_effect = MarketplaceAuthError('bad creds')

        assert client.search('Jafar') == []
        session.get.assert_not_called()

    def test_unauthorized_invalidates_token(self):
        session = MagicMock()
        session.get.return_value.status_code = 401
        session.get.return_value.raise_for_status.side_effect = requests.HTTPError('401')
        client, _ = self._client(session=session)

        assert client.search('Jafar') == []
        client.token_cache.invalidate.assert_called_once()


class TestPriceAggregator:
    """价格聚合测试"""

    def test_mean_price(self):
        assert mean_price([_item(10), _item(20), _item(30)]) == 20

    def test_mean_price_empty(self):
        assert mean_price([]) == 0

    def test_mean_price_ignores_unparseable(self):
        assert mean_price([_item(10), _item(None), _item(30)]) == 20

    def test_history_points_sorted_and_filtered(self):
        """按日期升序, 丢弃缺少日期或价格的条目"""
        d1 = datetime(2024, 1, 1, tzinfo=timezone.utc)
        d2 = datetime(2024, 1, 5, tzinfo=timezone.utc)
        d3 = datetime(2024, 1, 3, tzinfo=timezone.utc)

        points = history_points([
            _item(30, d2),
            _item(None, d1),
            _item(10, d1),
            _item(25, None),
            _item(20, d3),
        ])

        assert [p.price for p in points] == [10, 20, 30]
        assert [p.date for p in points] == sorted(p.date for p in points)

    def test_average_price_uses_sold_search(self):
        client = MagicMock()
        client.search_sold.return_value = [_item(10), _item(20), _item(30)]

        assert PriceAggregator(client).average_price('Jafar') == 20
        client.search_sold.assert_called_once_with('Jafar', limit=20)

    def test_average_price_without_results(self):
        """没有结果时为 0 (无信号)"""
        client = MagicMock()
        client.search_sold.return_value = []

        assert PriceAggregator(client).average_price('Jafar') == 0

    def test_price_history_limit(self):
        client = MagicMock()
        client.search_sold.return_value = []

        assert PriceAggregator(client).price_history('Jafar') == []
        client.search_sold.assert_called_once_with('Jafar', limit=30)


class TestBuildMarketplace:

    def test_sandbox_hosts(self):
        market = build_marketplace({'EBAY_APP_ID': 'a', 'EBAY_CERT_ID': 'b', 'EBAY_SANDBOX': True})

        assert 'sandbox' in market.client.base_url
        assert 'sandbox' in market.token_cache.auth_url
        assert market.aggregator.client is market.client

    def test_production_hosts(self):
        market = build_marketplace({'EBAY_SANDBOX': False})

        assert market.client.base_url == 'https://api.ebay.com'
        assert 'sandbox' not in market.token_cache.auth_url
