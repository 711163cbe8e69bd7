"""
Pin Tracker - Flask 应用工厂
"""
import os
import sys

from flask import Flask
from flask_login import LoginManager
from flask_sqlalchemy import SQLAlchemy
from loguru import logger

db = SQLAlchemy()
login_manager = LoginManager()


def create_app(config_name=None, marketplace=None):
    """
    应用工厂函数

    Args:
        config_name: development / production / testing, 默认读取 FLASK_ENV
        marketplace: 可选的 Marketplace 实例 (测试时注入假的客户端)
    """
    app = Flask(__name__)

    # 加载配置
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app.config.from_object(f'pintracker.config.{config_name.capitalize()}Config')

    # JSON 字段保持 to_dict() 中的顺序
    app.json.sort_keys = False

    _configure_logging(app)

    # sqlite 数据库文件所在目录
    db_uri = app.config.get('SQLALCHEMY_DATABASE_URI', '')
    if db_uri.startswith('sqlite:///') and not db_uri.endswith(':memory:'):
        os.makedirs(os.path.dirname(os.path.abspath(db_uri[len('sqlite:///'):])), exist_ok=True)

    # 初始化扩展
    db.init_app(app)
    login_manager.init_app(app)

    # 市场组件: 进程内只创建一次
    if marketplace is None:
        from marketplace import build_marketplace
        marketplace = build_marketplace(app.config)
    app.extensions['marketplace'] = marketplace

    from pintracker.errors import register_error_handlers
    register_error_handlers(app)

    # 注册蓝图
    from pintracker.routes import auth, pins, collection, messages, admin

    app.register_blueprint(auth.bp)
    app.register_blueprint(pins.bp)
    app.register_blueprint(collection.bp)
    app.register_blueprint(messages.bp)
    app.register_blueprint(admin.bp)

    # 创建数据库表
    with app.app_context():
        from pintracker import models  # noqa: F401
        db.create_all()

        # 首次启动写入示例图鉴
        if app.config.get('SEED_SAMPLE_DATA'):
            from pintracker.seed import seed_sample_data
            seed_sample_data()

    logger.info(f"Pin Tracker started ({config_name})")
    return app


def _configure_logging(app):
    """配置 loguru 输出"""
    logger.remove()
    logger.add(sys.stderr, level='DEBUG' if app.config.get('DEBUG') else 'INFO')

    log_file = app.config.get('LOG_FILE')
    if log_file:
        logger.add(log_file, rotation="10 MB", retention="7 days", level='INFO')
