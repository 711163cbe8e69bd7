"""
路由公共工具
"""
from functools import wraps

from flask_login import current_user

from pintracker import login_manager
from pintracker.errors import AuthenticationError, AuthorizationError


@login_manager.unauthorized_handler
def unauthorized():
    """未登录时返回 401 JSON, 而不是重定向到登录页"""
    raise AuthenticationError()


def admin_required(view):
    """需要登录且 is_admin 为真"""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not current_user.is_authenticated:
            raise AuthenticationError()
        if not current_user.is_admin:
            raise AuthorizationError('Admin access required')
        return view(*args, **kwargs)
    return wrapped
