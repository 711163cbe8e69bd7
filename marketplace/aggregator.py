"""
价格聚合 - 从已售商品估算当前价值与价格走势

朴素的算术平均 / 点列表, 不做去重、异常值剔除或加权。
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List


@dataclass
class PricePoint:
    """一次成交价格"""
    date: datetime
    price: float

    def to_dict(self):
        return {'date': self.date.isoformat(), 'price': self.price}


def mean_price(items: Iterable) -> float:
    """可解析价格的算术平均, 没有价格时为 0"""
    prices = [item.price for item in items if item.price is not None]
    if not prices:
        return 0
    return sum(prices) / len(prices)


def history_points(items: Iterable) -> List[PricePoint]:
    """过滤缺少成交时间或价格的条目, 按时间升序排列"""
    points = [
        PricePoint(date=item.end_date, price=item.price)
        for item in items
        if item.end_date is not None and item.price is not None
    ]
    return sorted(points, key=lambda p: p.date)


class PriceAggregator:
    """价格聚合器"""

    AVERAGE_LIMIT = 20
    HISTORY_LIMIT = 30

    def __init__(self, client):
        self.client = client

    def average_price(self, item_title: str) -> float:
        """
        已售商品均价

        返回 0 表示"没有数据", 而不是免费。
        """
        return mean_price(self.client.search_sold(item_title, limit=self.AVERAGE_LIMIT))

    def price_history(self, item_title: str) -> List[PricePoint]:
        """已售商品价格走势 (按成交时间升序)"""
        return history_points(self.client.search_sold(item_title, limit=self.HISTORY_LIMIT))
