"""
价格历史模型
"""
from pintracker import db
from datetime import datetime


class PriceHistory(db.Model):
    """
    价格历史记录
    只追加, 不修改也不删除 (重建数据库除外)
    """
    __tablename__ = 'pin_price_history'

    id = db.Column(db.Integer, primary_key=True)

    # 所属徽章
    pin_id = db.Column(db.Integer, db.ForeignKey('pins.id'), nullable=False, index=True)

    # 价格 (USD)
    price = db.Column(db.Float, nullable=False)

    # 价格来源: eBay / manual
    source = db.Column(db.String(30), nullable=False)

    # 记录时间
    recorded_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    # 联合索引用于快速查询价格走势
    __table_args__ = (
        db.Index('idx_price_pin_time', 'pin_id', 'recorded_at'),
    )

    def __repr__(self):
        return f'<PriceHistory {self.pin_id} {self.price}>'

    def to_dict(self):
        return {
            'id': self.id,
            'pinId': self.pin_id,
            'price': self.price,
            'source': self.source,
            'recordedAt': self.recorded_at.isoformat() if self.recorded_at else None,
        }
