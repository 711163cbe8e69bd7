"""
收藏和愿望单模型
"""
from pintracker import db
from datetime import datetime


class UserPin(db.Model):
    """
    用户收藏 - 已拥有的徽章
    """
    __tablename__ = 'user_pins'

    id = db.Column(db.Integer, primary_key=True)

    # 所属用户
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    # 收藏的徽章
    pin_id = db.Column(db.Integer, db.ForeignKey('pins.id'), nullable=False, index=True)

    # 备注
    notes = db.Column(db.Text)

    # 是否可交换
    for_trade = db.Column(db.Boolean, default=False)

    # 购入价格 (可选)
    purchase_price = db.Column(db.Float)

    # 购入日期 (可选)
    purchase_date = db.Column(db.Date)

    # 添加时间
    added_at = db.Column(db.DateTime, default=datetime.utcnow)

    # 联合唯一约束: user_id + pin_id
    __table_args__ = (
        db.UniqueConstraint('user_id', 'pin_id', name='uq_user_pin'),
    )

    def __repr__(self):
        return f'<UserPin user={self.user_id} pin={self.pin_id}>'

    def to_dict(self, with_pin=False):
        data = {
            'id': self.id,
            'userId': self.user_id,
            'pinId': self.pin_id,
            'notes': self.notes,
            'forTrade': bool(self.for_trade),
            'purchasePrice': self.purchase_price,
            'purchaseDate': self.purchase_date.isoformat() if self.purchase_date else None,
            'addedAt': self.added_at.isoformat() if self.added_at else None,
        }
        if with_pin:
            data['pin'] = self.pin.to_dict()
        return data


class WantListItem(db.Model):
    """
    愿望单 - 想要的徽章
    """
    __tablename__ = 'want_list'

    id = db.Column(db.Integer, primary_key=True)

    # 所属用户
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    # 想要的徽章
    pin_id = db.Column(db.Integer, db.ForeignKey('pins.id'), nullable=False, index=True)

    # 优先级: 1 (低) ~ 5 (高)
    priority = db.Column(db.Integer, default=1)

    # 期望价格上限 (可选)
    max_price = db.Column(db.Float)

    # 添加时间
    added_at = db.Column(db.DateTime, default=datetime.utcnow)

    # 联合唯一约束
    __table_args__ = (
        db.UniqueConstraint('user_id', 'pin_id', name='uq_want_list'),
    )

    def __repr__(self):
        return f'<WantListItem user={self.user_id} pin={self.pin_id}>'

    def to_dict(self, with_pin=False):
        data = {
            'id': self.id,
            'userId': self.user_id,
            'pinId': self.pin_id,
            'priority': self.priority,
            'maxPrice': self.max_price,
            'addedAt': self.added_at.isoformat() if self.added_at else None,
        }
        if with_pin:
            data['pin'] = self.pin.to_dict()
        return data
