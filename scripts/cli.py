#!/usr/bin/env python3
"""
Pin Tracker 维护 CLI

用法:
    python scripts/cli.py init-db                 # 创建数据库表
    python scripts/cli.py reseed                  # 清空并重建示例图鉴
    python scripts/cli.py prices                  # 从 eBay 刷新全部徽章价格
    python scripts/cli.py prices --limit 5        # 只刷新前 5 枚
    python scripts/cli.py grant-admin devtest     # 授予管理员权限
"""
import sys
import os
import argparse

# 设置路径
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from loguru import logger

from pintracker import create_app, db


def cmd_init_db(args):
    """创建所有数据库表"""
    app = create_app(args.env)
    with app.app_context():
        db.create_all()
    logger.info("Database tables created")


def cmd_reseed(args):
    """重建示例图鉴"""
    from pintracker.seed import reseed_database

    app = create_app(args.env)
    with app.app_context():
        count = reseed_database()
    logger.info(f"Reseeded {count} pins")


def cmd_prices(args):
    """刷新价格"""
    from pintracker.price_sync import sync_all_prices

    app = create_app(args.env)
    with app.app_context():
        sync_all_prices(limit=args.limit)


def cmd_grant_admin(args):
    """授予 / 撤销管理员"""
    from pintracker.stores.users import UserStore

    app = create_app(args.env)
    with app.app_context():
        user = UserStore(db.session).set_admin(args.username, is_admin=not args.revoke)
        logger.info(f"{user.username}: is_admin={user.is_admin}")


def main():
    parser = argparse.ArgumentParser(
        description='Pin Tracker 管理工具',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--env', type=str, default=None,
                        choices=['development', 'production', 'testing'],
                        help='配置环境 (默认读取 FLASK_ENV)')
    subparsers = parser.add_subparsers(dest='command', help='子命令')

    init_parser = subparsers.add_parser('init-db', help='创建数据库表')
    init_parser.set_defaults(func=cmd_init_db)

    reseed_parser = subparsers.add_parser('reseed', help='重建示例图鉴')
    reseed_parser.set_defaults(func=cmd_reseed)

    prices_parser = subparsers.add_parser('prices', help='从 eBay 刷新价格')
    prices_parser.add_argument('--limit', type=int, help='限制刷新的徽章数量')
    prices_parser.set_defaults(func=cmd_prices)

    admin_parser = subparsers.add_parser('grant-admin', help='授予管理员权限')
    admin_parser.add_argument('username', type=str)
    admin_parser.add_argument('--revoke', action='store_true', help='撤销管理员权限')
    admin_parser.set_defaults(func=cmd_grant_admin)

    args = parser.parse_args()

    if args.command:
        args.func(args)
    else:
        parser.print_help()


if __name__ == '__main__':
    main()
