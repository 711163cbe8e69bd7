"""
价格同步 - eBay 已售均价 -> 徽章当前价 + 价格历史
"""
from flask import current_app
from loguru import logger

from pintracker import db
from pintracker.stores.catalog import CatalogStore

PRICE_SOURCE = 'eBay'


def get_marketplace():
    """应用工厂创建的 Marketplace 实例"""
    return current_app.extensions['marketplace']


def refresh_pin_value(pin_id, aggregator=None, store=None):
    """
    用 eBay 已售均价刷新一枚徽章

    均价为 0 表示没有数据 (或 eBay 暂时不可用), 此时不写入任何东西,
    直接返回原徽章。

    Returns:
        (pin, updated)
    """
    store = store or CatalogStore(db.session)
    aggregator = aggregator or get_marketplace().aggregator

    pin = store.get_pin(pin_id)
    average = aggregator.average_price(pin.name)

    if not average or average <= 0:
        logger.info(f"No eBay price signal for pin {pin_id} ({pin.name})")
        return pin, False

    return store.record_price(pin_id, round(average, 2), source=PRICE_SOURCE), True


def sync_all_prices(limit=None, aggregator=None):
    """
    刷新全部徽章的价格

    Args:
        limit: 限制更新的徽章数量 (用于测试)

    Returns:
        实际更新的徽章数
    """
    store = CatalogStore(db.session)
    pins = store.list_pins()
    if limit:
        pins = pins[:limit]

    logger.info(f"Refreshing prices for {len(pins)} pins...")

    total_updated = 0
    for i, pin in enumerate(pins):
        _, updated = refresh_pin_value(pin.id, aggregator=aggregator, store=store)
        if updated:
            total_updated += 1

        if i % 10 == 0 and i > 0:
            logger.info(f"Progress: {i}/{len(pins)} pins")

    logger.info(f"Updated {total_updated} pin prices")
    return total_updated
