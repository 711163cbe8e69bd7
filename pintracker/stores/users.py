"""
用户数据访问
"""
from datetime import datetime

from pintracker.errors import NotFoundError, ValidationError
from pintracker.models.user import User


class UserStore:

    def __init__(self, session):
        self.session = session

    def get(self, user_id) -> User:
        user = self.session.get(User, user_id)
        if user is None:
            raise NotFoundError('User not found')
        return user

    def get_by_username(self, username):
        if not username or not username.strip():
            return None
        return self.session.query(User).filter_by(username=username.strip()).first()

    def create(self, username, password, display_name=None, email=None, avatar_url=None,
               is_admin=False) -> User:
        if self.get_by_username(username):
            raise ValidationError('Username already exists',
                                  errors=[{'field': 'username', 'message': 'Username already exists'}])

        user = User(
            username=username,
            display_name=display_name or username,
            email=email or None,
            avatar_url=avatar_url or None,
            is_admin=is_admin
        )
        user.set_password(password)

        self.session.add(user)
        self.session.commit()
        return user

    def authenticate(self, username, password):
        """用户名密码正确时返回用户, 否则 None"""
        user = self.get_by_username(username)
        if user and user.check_password(password):
            user.last_login_at = datetime.utcnow()
            self.session.commit()
            return user
        return None

    def set_admin(self, username, is_admin=True) -> User:
        user = self.get_by_username(username)
        if user is None:
            raise NotFoundError('User not found')
        user.is_admin = is_admin
        self.session.commit()
        return user
