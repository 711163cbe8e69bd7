"""
配置文件 - 开发/生产/测试环境分离
"""
import os

basedir = os.path.abspath(os.path.dirname(__file__))


def _env_list(name, default=''):
    """逗号分隔的环境变量 -> 列表"""
    raw = os.environ.get(name, default)
    return [v.strip() for v in raw.split(',') if v.strip()]


class BaseConfig:
    """基础配置"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'pin-tracker-secret-key-change-in-production'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # 首次启动时写入示例图鉴
    SEED_SAMPLE_DATA = True

    # 管理员用户名 (注册时自动授予 is_admin)
    ADMIN_USERNAMES = _env_list('ADMIN_USERNAMES')

    # eBay API
    EBAY_APP_ID = os.environ.get('EBAY_APP_ID')
    EBAY_CERT_ID = os.environ.get('EBAY_CERT_ID')
    EBAY_SANDBOX = True
    EBAY_MARKETPLACE_ID = os.environ.get('EBAY_MARKETPLACE_ID', 'EBAY_US')
    MARKETPLACE_TIMEOUT = float(os.environ.get('MARKETPLACE_TIMEOUT', 10))
    MARKETPLACE_QUERY_PREFIX = 'Disney pin'
    # eBay "Disney Pins" 分类
    MARKETPLACE_CATEGORY_ID = '50310'

    # 日志文件 (None 表示只输出到 stderr)
    LOG_FILE = os.path.join(basedir, '..', 'logs', 'pintracker_{time}.log')


class DevelopmentConfig(BaseConfig):
    """开发环境配置"""
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, '..', 'data', 'pintracker_dev.db')


class ProductionConfig(BaseConfig):
    """生产环境配置"""
    DEBUG = False
    EBAY_SANDBOX = os.environ.get('EBAY_SANDBOX', '0') == '1'

    # Handle postgres:// vs SQLAlchemy's postgresql://
    _db_uri = os.environ.get('DATABASE_URL', '')
    if _db_uri.startswith('postgres://'):
        _db_uri = _db_uri.replace('postgres://', 'postgresql://', 1)
    SQLALCHEMY_DATABASE_URI = _db_uri or 'sqlite:///' + os.path.join(basedir, '..', 'data', 'pintracker.db')


class TestingConfig(BaseConfig):
    """测试环境配置"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SEED_SAMPLE_DATA = False
    LOG_FILE = None
    ADMIN_USERNAMES = ['admin']
    EBAY_APP_ID = 'test-app-id'
    EBAY_CERT_ID = 'test-cert-id'
