"""
徽章模型 - 图鉴核心数据
"""
from pintracker import db
from datetime import datetime


class Pin(db.Model):
    """
    图鉴中的一枚徽章
    current_value 由价格同步更新, 应与最新一条价格历史一致
    """
    __tablename__ = 'pins'

    id = db.Column(db.Integer, primary_key=True)

    # 名称
    name = db.Column(db.String(200), nullable=False, index=True)

    # 描述
    description = db.Column(db.Text)

    # 所属系列 (如: Aladdin 30th Anniversary)
    collection = db.Column(db.String(200), index=True)

    # 图片URL
    image_url = db.Column(db.String(500))

    # 分类 (如: Characters / Villains / Attractions)
    category = db.Column(db.String(100), index=True)

    # 发售日期
    release_date = db.Column(db.Date)

    # 是否限定版
    is_limited_edition = db.Column(db.Boolean, default=False)

    # 当前市场价 (USD)
    current_value = db.Column(db.Float)

    # 创建时间
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    # 关系
    price_history = db.relationship('PriceHistory', backref='pin', lazy='dynamic', cascade='all, delete-orphan')
    owners = db.relationship('UserPin', backref='pin', lazy='dynamic')
    wanted_by = db.relationship('WantListItem', backref='pin', lazy='dynamic')

    def __repr__(self):
        return f'<Pin {self.id} {self.name}>'

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'collection': self.collection,
            'imageUrl': self.image_url,
            'category': self.category,
            'releaseDate': self.release_date.isoformat() if self.release_date else None,
            'isLimitedEdition': bool(self.is_limited_edition),
            'currentValue': self.current_value,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }
