"""
图鉴路由 - 徽章、统计与价格
"""
from flask import Blueprint, jsonify, request
from flask_login import login_required

from pintracker import db
from pintracker.price_sync import get_marketplace, refresh_pin_value
from pintracker.schemas import PinCreate, parse_body
from pintracker.stores.catalog import CatalogStore

bp = Blueprint('pins', __name__, url_prefix='/api/pins')


@bp.route('')
def pin_list():
    """徽章列表"""
    query = request.args.get('q', '').strip()
    collection = request.args.get('collection', '').strip()
    category = request.args.get('category', '').strip()

    pins = CatalogStore(db.session).list_pins(
        query=query or None,
        collection=collection or None,
        category=category or None
    )
    return jsonify([p.to_dict() for p in pins])


@bp.route('/<int:pin_id>')
def pin_detail(pin_id):
    """徽章详情"""
    return jsonify(CatalogStore(db.session).get_pin(pin_id).to_dict())


@bp.route('', methods=['POST'])
@login_required
def pin_create():
    """新建徽章"""
    data = parse_body(PinCreate)
    pin = CatalogStore(db.session).create_pin(data.model_dump())
    return jsonify(pin.to_dict()), 201


@bp.route('/<int:pin_id>/stats')
def pin_stats(pin_id):
    """拥有 / 想要人数"""
    return jsonify(CatalogStore(db.session).get_stats(pin_id))


@bp.route('/<int:pin_id>/price-history')
def pin_price_history(pin_id):
    """已保存的价格历史 (升序)"""
    history = CatalogStore(db.session).get_price_history(pin_id)
    return jsonify([h.to_dict() for h in history])


@bp.route('/<int:pin_id>/ebay-price')
def pin_ebay_price(pin_id):
    """从 eBay 刷新当前价并保存, 返回徽章"""
    pin, _ = refresh_pin_value(pin_id)
    return jsonify(pin.to_dict())


@bp.route('/<int:pin_id>/ebay-price-history')
def pin_ebay_price_history(pin_id):
    """eBay 实时成交走势 (不保存)"""
    pin = CatalogStore(db.session).get_pin(pin_id)
    points = get_marketplace().aggregator.price_history(pin.name)
    return jsonify([p.to_dict() for p in points])
