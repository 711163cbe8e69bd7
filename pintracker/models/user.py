"""
用户模型
"""
from pintracker import db, login_manager
from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash
from datetime import datetime


class User(UserMixin, db.Model):
    """用户"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)

    # 用户名 (唯一)
    username = db.Column(db.String(50), unique=True, nullable=False, index=True)

    # 密码哈希
    password_hash = db.Column(db.String(256), nullable=False)

    # 显示名称
    display_name = db.Column(db.String(100))

    # 邮箱
    email = db.Column(db.String(120))

    # 头像URL
    avatar_url = db.Column(db.String(500))

    # 管理员 (可重建数据库、从 eBay 导入)
    is_admin = db.Column(db.Boolean, default=False, nullable=False)

    # 创建时间
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    last_login_at = db.Column(db.DateTime)

    # 关系
    collection = db.relationship('UserPin', backref='user', lazy='dynamic', cascade='all, delete-orphan')
    want_list = db.relationship('WantListItem', backref='user', lazy='dynamic', cascade='all, delete-orphan')

    def set_password(self, password):
        """设置密码"""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """验证密码"""
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        """JSON 表示, 不含密码"""
        return {
            'id': self.id,
            'username': self.username,
            'displayName': self.display_name,
            'email': self.email,
            'avatarUrl': self.avatar_url,
            'isAdmin': bool(self.is_admin),
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<User {self.username}>'


@login_manager.user_loader
def load_user(user_id):
    """Flask-Login 用户加载器"""
    return db.session.get(User, int(user_id))
