"""
管理员路由 - 重建数据库 / eBay 搜索与导入
"""
from flask import Blueprint, jsonify, request
from loguru import logger
from flask_login import current_user

from pintracker.errors import ValidationError
from pintracker.importer import import_listing, import_search_results, listing_to_pin_data
from pintracker.price_sync import get_marketplace
from pintracker.routes import admin_required
from pintracker.schemas import ListingImport, parse_body
from pintracker.seed import reseed_database

bp = Blueprint('admin', __name__, url_prefix='/api')

SEARCH_LIMIT = 20


def _search_term():
    query = request.args.get('q', '').strip()
    if not query:
        raise ValidationError('Search term is required',
                              errors=[{'field': 'q', 'message': 'Search term is required'}])
    return query


@bp.route('/admin/reseed-database', methods=['POST'])
@admin_required
def reseed():
    """清空并重建示例图鉴"""
    logger.warning(f"Database reseed requested by {current_user.username}")
    count = reseed_database()
    return jsonify({'success': True, 'pinCount': count})


@bp.route('/ebay/search')
@admin_required
def ebay_search():
    """eBay 在售商品搜索"""
    limit = request.args.get('limit', SEARCH_LIMIT, type=int)
    items = get_marketplace().client.search(_search_term(), limit=max(1, min(limit, 200)))
    return jsonify({
        'total': len(items),
        'itemSummaries': [i.to_dict() for i in items]
    })


@bp.route('/ebay/cache-pins')
@admin_required
def ebay_cache_pins():
    """搜索并导入全部结果"""
    items = get_marketplace().client.search(_search_term(), limit=SEARCH_LIMIT)
    pins = import_search_results(items)
    return jsonify({'pins': [p.to_dict() for p in pins]})


@bp.route('/admin/import-pin-from-ebay', methods=['POST'])
@admin_required
def import_pin():
    """导入单个 eBay 商品"""
    data = parse_body(ListingImport)
    pin, created = import_listing(listing_to_pin_data(**data.model_dump()))
    return jsonify(pin.to_dict()), 201 if created else 200
