"""
示例图鉴数据 - 首次启动 / 管理员重建数据库时写入
"""
import random
from datetime import date, datetime, timedelta

from loguru import logger

from pintracker import db
from pintracker.models.collection import UserPin, WantListItem
from pintracker.models.pin import Pin
from pintracker.models.price import PriceHistory
from pintracker.stores.catalog import CatalogStore

# 每枚徽章生成的历史价格天数
HISTORY_DAYS = 30

SAMPLE_PINS = [
    # Aladdin 30th Anniversary (Pin and Pop)
    {
        'name': 'Aladdin 30th Anniversary - Jasmine & Rajah',
        'description': 'Beautiful pin showing Princess Jasmine with her loyal tiger companion Rajah. Part of the Aladdin 30th Anniversary series.',
        'collection': 'Aladdin 30th Anniversary',
        'image_url': 'https://pinandpop.com/cdn/shop/products/image_ba3a1d35-aba5-4c85-a13d-c4af9b31b4c9_1500x.jpg',
        'category': 'Characters',
        'release_date': '2022-11-25',
        'is_limited_edition': True,
        'current_value': 43.99,
    },
    {
        'name': 'Aladdin 30th Anniversary - Genie Magic Lamp',
        'description': 'Stunning pin featuring the Genie emerging from his magic lamp, with detailed gold accents. Part of the Aladdin 30th Anniversary series.',
        'collection': 'Aladdin 30th Anniversary',
        'image_url': 'https://pinandpop.com/cdn/shop/products/image_b5af4ef1-e9ef-4ebc-8bfe-53b35ad0ee21_1500x.jpg',
        'category': 'Characters',
        'release_date': '2022-11-25',
        'is_limited_edition': True,
        'current_value': 45.50,
    },
    {
        'name': 'Aladdin 30th Anniversary - Jafar',
        'description': 'Detailed pin depicting the villainous Jafar with his cobra staff. Part of the Aladdin 30th Anniversary series.',
        'collection': 'Aladdin 30th Anniversary',
        'image_url': 'https://pinandpop.com/cdn/shop/products/image_97bd3c12-63bb-4d91-872c-0b1a23841dba_1500x.jpg',
        'category': 'Villains',
        'release_date': '2022-11-25',
        'is_limited_edition': True,
        'current_value': 47.99,
    },
    {
        'name': 'Aladdin 30th Anniversary - Abu',
        'description': "Cute pin featuring Aladdin's mischievous monkey companion Abu holding a jewel. Part of the Aladdin 30th Anniversary series.",
        'collection': 'Aladdin 30th Anniversary',
        'image_url': 'https://pinandpop.com/cdn/shop/products/image_cf2b77e9-ecce-4f96-8a51-8a4a9f12ab9f_1500x.jpg',
        'category': 'Characters',
        'release_date': '2022-11-25',
        'is_limited_edition': True,
        'current_value': 38.99,
    },
    {
        'name': 'Aladdin 30th Anniversary - Magic Carpet Ride',
        'description': "Romantic pin showing Aladdin and Jasmine on their magic carpet ride during 'A Whole New World'. Part of the Aladdin 30th Anniversary series.",
        'collection': 'Aladdin 30th Anniversary',
        'image_url': 'https://pinandpop.com/cdn/shop/products/image_88c14d4b-0d01-4878-b23e-9c7a066a6f6a_1500x.jpg',
        'category': 'Scenes',
        'release_date': '2022-11-25',
        'is_limited_edition': True,
        'current_value': 52.99,
    },
    {
        'name': 'Aladdin 30th Anniversary - Iago',
        'description': "Colorful pin featuring Jafar's parrot sidekick Iago. Part of the Aladdin 30th Anniversary series.",
        'collection': 'Aladdin 30th Anniversary',
        'image_url': 'https://pinandpop.com/cdn/shop/products/image_26ae0d1d-98ea-469d-a7d8-2172bb4a16ac_1500x.jpg',
        'category': 'Characters',
        'release_date': '2022-11-25',
        'is_limited_edition': True,
        'current_value': 39.50,
    },
    {
        'name': 'Mickey Mouse 50th Anniversary',
        'description': "Commemorative pin celebrating Mickey Mouse's 50th Anniversary with gold detailing and iconic pose.",
        'collection': 'Disney Celebrations',
        'image_url': 'https://cdn-ssl.s7.disneystore.com/is/image/DisneyShopping/6505057372939',
        'category': 'Characters',
        'release_date': '2021-10-01',
        'is_limited_edition': True,
        'current_value': 45.99,
    },
    {
        'name': 'Haunted Mansion: Hitchhiking Ghosts',
        'description': 'Detailed pin showcasing the iconic Hitchhiking Ghosts from the Haunted Mansion attraction.',
        'collection': 'Disney Parks',
        'image_url': 'https://cdn-ssl.s7.disneystore.com/is/image/DisneyShopping/400020820926',
        'category': 'Attractions',
        'release_date': '2020-09-01',
        'is_limited_edition': False,
        'current_value': 35.50,
    },
    {
        'name': 'Star Wars: The Mandalorian and Grogu',
        'description': 'Limited edition pin featuring The Mandalorian holding Grogu (Baby Yoda) in his iconic hovering pram.',
        'collection': 'Star Wars',
        'image_url': 'https://cdn-ssl.s7.disneystore.com/is/image/DisneyShopping/6505057372911',
        'category': 'Movies',
        'release_date': '2019-12-15',
        'is_limited_edition': True,
        'current_value': 32.75,
    },
    {
        'name': 'Stitch with Dole Whip',
        'description': 'Adorable pin of Stitch enjoying a classic Dole Whip treat at Disney Parks.',
        'collection': 'Disney Food',
        'image_url': 'https://cdn-ssl.s7.disneystore.com/is/image/DisneyShopping/400929419889',
        'category': 'Characters',
        'release_date': '2022-06-01',
        'is_limited_edition': False,
        'current_value': 28.99,
    },
    {
        'name': 'Disney Castle 100th Anniversary',
        'description': 'Commemorative pin featuring the iconic Cinderella Castle with special 100th anniversary Disney detailing and sparkle effects.',
        'collection': 'Anniversary Collection',
        'image_url': 'https://cdn-ssl.s7.disneystore.com/is/image/DisneyShopping/400022345146',
        'category': 'Landmarks',
        'release_date': '2023-01-01',
        'is_limited_edition': True,
        'current_value': 49.99,
    },
    {
        'name': 'Minnie Mouse: Vintage Style',
        'description': 'Retro-styled Minnie Mouse pin featuring classic animation art from the early Disney era.',
        'collection': 'Disney Classics',
        'image_url': 'https://cdn-ssl.s7.disneystore.com/is/image/DisneyShopping/400021045697',
        'category': 'Characters',
        'release_date': '2022-05-15',
        'is_limited_edition': False,
        'current_value': 29.99,
    },
    {
        'name': 'WALL-E and EVE',
        'description': 'Adorable pin showing WALL-E and EVE together in outer space with stars in the background.',
        'collection': 'Pixar Collection',
        'image_url': 'https://cdn-ssl.s7.disneystore.com/is/image/DisneyShopping/400929695953',
        'category': 'Pixar',
        'release_date': '2021-08-10',
        'is_limited_edition': False,
        'current_value': 27.99,
    },
    {
        'name': 'Marvel: Avengers Logo',
        'description': 'Official Avengers logo pin with metallic detailing and gemstone accents.',
        'collection': 'Marvel Heroes',
        'image_url': 'https://cdn-ssl.s7.disneystore.com/is/image/DisneyShopping/6505057373840',
        'category': 'Marvel',
        'release_date': '2022-11-25',
        'is_limited_edition': False,
        'current_value': 32.50,
    },
    {
        'name': 'Jungle Cruise: Skipper Mickey',
        'description': 'Mickey Mouse dressed as a Jungle Cruise skipper with the iconic boat in the background.',
        'collection': 'Disney Parks',
        'image_url': 'https://cdn-ssl.s7.disneystore.com/is/image/DisneyShopping/400020820859',
        'category': 'Attractions',
        'release_date': '2022-07-30',
        'is_limited_edition': True,
        'current_value': 38.99,
    },
    {
        'name': 'Tinker Bell: Pixie Dust Trail',
        'description': 'Tinker Bell flying and leaving a trail of sparkling pixie dust behind her.',
        'collection': 'Disney Fairies',
        'image_url': 'https://cdn-ssl.s7.disneystore.com/is/image/DisneyShopping/6505057373734',
        'category': 'Characters',
        'release_date': '2023-02-14',
        'is_limited_edition': False,
        'current_value': 26.99,
    },
    {
        'name': 'Goofy: Through the Years',
        'description': "Special pin showcasing Goofy's evolution through multiple decades of Disney animation.",
        'collection': 'Evolution Series',
        'image_url': 'https://cdn-ssl.s7.disneystore.com/is/image/DisneyShopping/400021045673',
        'category': 'Characters',
        'release_date': '2023-03-09',
        'is_limited_edition': True,
        'current_value': 42.50,
    },
    {
        'name': 'Disney Monorail',
        'description': 'Detailed pin of the iconic Disney Parks monorail system with moving parts.',
        'collection': 'Disney Transportation',
        'image_url': 'https://cdn-ssl.s7.disneystore.com/is/image/DisneyShopping/400020820873',
        'category': 'Transportation',
        'release_date': '2022-08-12',
        'is_limited_edition': False,
        'current_value': 33.75,
    },
]


def synthetic_prices(current_value, days=HISTORY_DAYS, rng=None, now=None):
    """
    生成上涨趋势 + 随机波动的每日价格

    起点为当前价的 80%, 到最后一天上涨 30%, 每天 ±2.5 的噪声
    """
    rng = rng or random.Random()
    now = now or datetime.utcnow()

    points = []
    for i in range(1, days + 1):
        base = current_value * 0.8
        trend = (i / days) * current_value * 0.3
        noise = (rng.random() - 0.5) * 5
        points.append((now - timedelta(days=days - i), round(base + trend + noise, 2)))
    return points


def seed_sample_data(rng=None):
    """图鉴为空时写入示例徽章和价格历史, 返回写入的徽章数"""
    store = CatalogStore(db.session)
    if store.count() > 0:
        return 0

    logger.info("Seeding sample pin catalog...")
    rng = rng or random.Random()

    for data in SAMPLE_PINS:
        data = dict(data, release_date=date.fromisoformat(data['release_date']))
        pin = store.create_pin(data, commit=False)

        for recorded_at, price in synthetic_prices(data['current_value'], rng=rng):
            store.add_price_history(pin.id, price, source='eBay', recorded_at=recorded_at, commit=False)

    db.session.commit()
    logger.info(f"Seeded {len(SAMPLE_PINS)} pins with {HISTORY_DAYS} days of price history")
    return len(SAMPLE_PINS)


def reseed_database(rng=None):
    """清空图鉴相关表后重新写入示例数据 (用户和消息保留)"""
    try:
        db.session.query(PriceHistory).delete()
        db.session.query(WantListItem).delete()
        db.session.query(UserPin).delete()
        db.session.query(Pin).delete()
        count = seed_sample_data(rng=rng)
    except Exception:
        db.session.rollback()
        raise

    logger.info("Database reseeded")
    return count
