"""
从 eBay 商品导入图鉴
"""
from loguru import logger

from pintracker import db
from pintracker.price_sync import PRICE_SOURCE
from pintracker.stores.catalog import CatalogStore

# (关键词, 系列, 分类), 按顺序匹配标题
TITLE_RULES = [
    (('star wars',), 'Star Wars', 'Star Wars'),
    (('princess', 'ariel', 'belle', 'cinderella', 'jasmine'), 'Disney Princesses', 'Princesses'),
    (('villain', 'maleficent', 'ursula', 'jafar', 'evil queen'), 'Disney Villains', 'Villains'),
    (('mickey', 'minnie', 'donald', 'goofy'), 'Mickey and Friends', 'Classic Disney'),
    (('haunted', 'splash', 'space', 'pirates'), 'Disney Parks', 'Park Attractions'),
]

DEFAULT_COLLECTION = 'Disney Collection'
DEFAULT_CATEGORY = 'Disney Pins'


def classify_title(title):
    """根据标题关键词推断 (系列, 分类)"""
    lower_title = (title or '').lower()
    for keywords, collection, category in TITLE_RULES:
        if any(k in lower_title for k in keywords):
            return collection, category
    return DEFAULT_COLLECTION, DEFAULT_CATEGORY


def listing_to_pin_data(name, image_url=None, price=None, collection=None,
                        category=None, description=None):
    """把 eBay 商品字段整理成徽章字段, 缺失的系列/分类由标题推断"""
    guessed_collection, guessed_category = classify_title(name)
    return {
        'name': name,
        'image_url': image_url,
        'collection': collection or guessed_collection,
        'category': category or guessed_category,
        'description': description or f'Authentic Disney Pin: {name}',
        'current_value': price if price and price > 0 else None,
    }


def import_listing(data, store=None):
    """
    导入一件商品为徽章

    同名徽章已存在时不重复导入。有价格时同时写入第一条价格历史。

    Returns:
        (pin, created)
    """
    store = store or CatalogStore(db.session)

    existing = store.find_by_name(data['name'])
    if existing:
        logger.debug(f"Pin already in catalog: {data['name']}")
        return existing, False

    pin = store.create_pin(data, commit=False)
    if pin.current_value:
        store.add_price_history(pin.id, pin.current_value, source=PRICE_SOURCE, commit=False)
    store.session.commit()

    logger.info(f"Imported pin {pin.id}: {pin.name}")
    return pin, True


def import_search_results(items, store=None):
    """
    批量导入搜索结果

    Args:
        items: ItemSummary 列表

    Returns:
        新导入的徽章列表
    """
    store = store or CatalogStore(db.session)
    imported = []

    for item in items:
        if not item.title:
            continue
        data = listing_to_pin_data(item.title, image_url=item.image_url, price=item.price)
        pin, created = import_listing(data, store=store)
        if created:
            imported.append(pin)

    logger.info(f"Imported {len(imported)} of {len(items)} eBay listings")
    return imported
