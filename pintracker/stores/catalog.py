"""
图鉴数据访问 - 徽章与价格历史
"""
from datetime import datetime

from loguru import logger
from sqlalchemy import func

from pintracker.errors import NotFoundError
from pintracker.models.collection import UserPin, WantListItem
from pintracker.models.pin import Pin
from pintracker.models.price import PriceHistory

PIN_FIELDS = (
    'name', 'description', 'collection', 'image_url', 'category',
    'release_date', 'is_limited_edition', 'current_value',
)


class CatalogStore:
    """徽章 CRUD + 只追加的价格历史"""

    def __init__(self, session):
        self.session = session

    def list_pins(self, query=None, collection=None, category=None):
        """列出图鉴, 可按名称关键字 / 系列 / 分类过滤"""
        q = self.session.query(Pin)

        if query:
            q = q.filter(Pin.name.ilike(f'%{query}%'))
        if collection:
            q = q.filter(Pin.collection == collection)
        if category:
            q = q.filter(Pin.category == category)

        return q.order_by(Pin.id).all()

    def get_pin(self, pin_id) -> Pin:
        pin = self.session.get(Pin, pin_id)
        if pin is None:
            raise NotFoundError('Pin not found')
        return pin

    def find_by_name(self, name):
        return self.session.query(Pin).filter(func.lower(Pin.name) == name.lower()).first()

    def create_pin(self, data: dict, commit=True) -> Pin:
        pin = Pin(**{k: v for k, v in data.items() if k in PIN_FIELDS})
        self.session.add(pin)
        if commit:
            self.session.commit()
        else:
            self.session.flush()
        return pin

    def update_current_value(self, pin_id, value, commit=True) -> Pin:
        pin = self.get_pin(pin_id)
        pin.current_value = value
        if commit:
            self.session.commit()
        return pin

    def add_price_history(self, pin_id, price, source='eBay', recorded_at=None, commit=True) -> PriceHistory:
        entry = PriceHistory(
            pin_id=pin_id,
            price=price,
            source=source,
            recorded_at=recorded_at or datetime.utcnow()
        )
        self.session.add(entry)
        if commit:
            self.session.commit()
        return entry

    def record_price(self, pin_id, price, source='eBay') -> Pin:
        """
        更新当前价并追加一条价格历史

        两次写入在同一个事务中提交, 失败时一起回滚
        """
        try:
            pin = self.update_current_value(pin_id, price, commit=False)
            self.add_price_history(pin_id, price, source=source, commit=False)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info(f"Pin {pin_id} value -> {price:.2f} ({source})")
        return pin

    def get_price_history(self, pin_id):
        """价格历史, 按记录时间升序"""
        self.get_pin(pin_id)
        return self.session.query(PriceHistory)\
            .filter(PriceHistory.pin_id == pin_id)\
            .order_by(PriceHistory.recorded_at, PriceHistory.id)\
            .all()

    def get_stats(self, pin_id):
        """拥有人数 / 想要人数"""
        self.get_pin(pin_id)
        have_count = self.session.query(func.count(UserPin.id))\
            .filter(UserPin.pin_id == pin_id).scalar() or 0
        want_count = self.session.query(func.count(WantListItem.id))\
            .filter(WantListItem.pin_id == pin_id).scalar() or 0
        return {'haveCount': have_count, 'wantCount': want_count}

    def count(self):
        return self.session.query(func.count(Pin.id)).scalar() or 0
