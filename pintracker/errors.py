"""
错误类型与 JSON 错误处理
"""
from flask import jsonify
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from marketplace.errors import MarketplaceError


class PinTrackerError(Exception):
    """所有业务错误的基类"""
    status_code = 500
    message = 'Internal server error'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        return {'message': self.message}


class ValidationError(PinTrackerError):
    """请求字段不合法 (400)"""
    status_code = 400
    message = 'Invalid request data'

    def __init__(self, message=None, errors=None):
        super().__init__(message)
        self.errors = errors or []

    def to_dict(self):
        return {'message': self.message, 'errors': self.errors}


class AuthenticationError(PinTrackerError):
    """未登录 (401)"""
    status_code = 401
    message = 'Not authenticated'


class AuthorizationError(PinTrackerError):
    """无权限 (403)"""
    status_code = 403
    message = 'Forbidden'


class NotFoundError(PinTrackerError):
    """资源不存在 (404)"""
    status_code = 404
    message = 'Not found'


class PersistenceError(PinTrackerError):
    """数据库错误 (500), 细节只写日志"""
    status_code = 500
    message = 'Database error'


def register_error_handlers(app):
    """注册 JSON 错误处理器"""
    from pintracker import db

    @app.errorhandler(PinTrackerError)
    def handle_app_error(error):
        if error.status_code >= 500:
            logger.error(f"{type(error).__name__}: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(error):
        db.session.rollback()
        logger.exception(f"Database error: {error}")
        return jsonify(PersistenceError().to_dict()), 500

    @app.errorhandler(MarketplaceError)
    def handle_marketplace_error(error):
        logger.error(f"Marketplace error: {error}")
        return jsonify({'message': 'Marketplace unavailable'}), 502

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({'message': error.description}), error.code
