"""
认证相关路由
"""
from flask import Blueprint, current_app, jsonify
from flask_login import current_user, login_required, login_user, logout_user

from pintracker import db
from pintracker.errors import AuthenticationError
from pintracker.schemas import LoginRequest, RegisterRequest, parse_body
from pintracker.stores.users import UserStore

bp = Blueprint('auth', __name__, url_prefix='/api')


@bp.route('/register', methods=['POST'])
def register():
    """注册并直接登录"""
    data = parse_body(RegisterRequest)

    user = UserStore(db.session).create(
        username=data.username,
        password=data.password,
        display_name=data.display_name,
        email=data.email,
        avatar_url=data.avatar_url,
        is_admin=data.username in current_app.config.get('ADMIN_USERNAMES', [])
    )
    login_user(user)

    return jsonify(user.to_dict()), 201


@bp.route('/login', methods=['POST'])
def login():
    """登录"""
    data = parse_body(LoginRequest)

    user = UserStore(db.session).authenticate(data.username, data.password)
    if user is None:
        raise AuthenticationError('Invalid username or password')

    login_user(user)
    return jsonify(user.to_dict())


@bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """退出登录"""
    logout_user()
    return jsonify({'success': True})


@bp.route('/user')
@login_required
def me():
    """当前登录用户"""
    return jsonify(current_user.to_dict())
