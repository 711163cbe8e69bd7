"""
收藏 / 愿望单数据访问
"""
from sqlalchemy.exc import IntegrityError

from pintracker.errors import NotFoundError
from pintracker.models.collection import UserPin, WantListItem
from pintracker.models.pin import Pin


class _UserPinRelationStore:
    """用户 <-> 徽章 关系表的通用操作"""

    model = None

    def __init__(self, session):
        self.session = session

    def list_for_user(self, user_id):
        """关系行 + 徽章, 最新添加的在前"""
        return self.session.query(self.model)\
            .join(Pin, self.model.pin_id == Pin.id)\
            .filter(self.model.user_id == user_id)\
            .order_by(self.model.added_at.desc(), self.model.id.desc())\
            .all()

    def get(self, user_id, pin_id):
        return self.session.query(self.model).filter_by(user_id=user_id, pin_id=pin_id).first()

    def _add(self, user_id, pin_id, **fields):
        """
        添加关系

        Returns:
            (entry, created): 已存在时返回原有记录, created 为 False
        """
        if self.session.get(Pin, pin_id) is None:
            raise NotFoundError('Pin not found')

        existing = self.get(user_id, pin_id)
        if existing:
            return existing, False

        entry = self.model(user_id=user_id, pin_id=pin_id, **fields)
        self.session.add(entry)
        try:
            self.session.commit()
        except IntegrityError:
            # 并发添加: 唯一约束冲突, 读回已存在的记录
            self.session.rollback()
            existing = self.get(user_id, pin_id)
            if existing is None:
                raise
            return existing, False
        return entry, True

    def remove(self, user_id, pin_id) -> bool:
        """删除关系, 返回是否真的删除了记录"""
        deleted = self.session.query(self.model)\
            .filter_by(user_id=user_id, pin_id=pin_id)\
            .delete()
        self.session.commit()
        return deleted > 0


class CollectionStore(_UserPinRelationStore):
    """已拥有的徽章"""

    model = UserPin

    def add(self, user_id, pin_id, notes=None, for_trade=False, purchase_price=None, purchase_date=None):
        return self._add(
            user_id, pin_id,
            notes=notes,
            for_trade=for_trade,
            purchase_price=purchase_price,
            purchase_date=purchase_date
        )

    def update(self, user_id, pin_id, **fields):
        """修改备注 / 购入信息"""
        entry = self.get(user_id, pin_id)
        if entry is None:
            raise NotFoundError('Pin is not in your collection')

        for key in ('notes', 'for_trade', 'purchase_price', 'purchase_date'):
            if key in fields:
                setattr(entry, key, fields[key])
        self.session.commit()
        return entry


class WantListStore(_UserPinRelationStore):
    """想要的徽章"""

    model = WantListItem

    def add(self, user_id, pin_id, priority=1, max_price=None):
        return self._add(user_id, pin_id, priority=priority, max_price=max_price)
