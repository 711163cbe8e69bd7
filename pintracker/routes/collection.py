"""
用户收藏 / 愿望单路由
"""
from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from pintracker import db
from pintracker.schemas import CollectionAdd, CollectionUpdate, WantListAdd, parse_body
from pintracker.stores.collection import CollectionStore, WantListStore

bp = Blueprint('collection', __name__, url_prefix='/api/user')


# ==================== 收藏 ====================

@bp.route('/pins')
@login_required
def collection_list():
    """我的收藏"""
    entries = CollectionStore(db.session).list_for_user(current_user.id)
    return jsonify([e.to_dict(with_pin=True) for e in entries])


@bp.route('/pins', methods=['POST'])
@login_required
def collection_add():
    """添加到收藏, 已存在时返回原记录"""
    data = parse_body(CollectionAdd)

    entry, created = CollectionStore(db.session).add(
        current_user.id,
        data.pin_id,
        notes=data.notes,
        for_trade=data.for_trade,
        purchase_price=data.purchase_price,
        purchase_date=data.purchase_date
    )
    return jsonify(entry.to_dict(with_pin=True)), 201 if created else 200


@bp.route('/pins/<int:pin_id>', methods=['PATCH'])
@login_required
def collection_update(pin_id):
    """修改收藏备注 / 购入信息"""
    fields = parse_body(CollectionUpdate, partial=True)
    entry = CollectionStore(db.session).update(current_user.id, pin_id, **fields)
    return jsonify(entry.to_dict(with_pin=True))


@bp.route('/pins/<int:pin_id>', methods=['DELETE'])
@login_required
def collection_remove(pin_id):
    """从收藏移除"""
    CollectionStore(db.session).remove(current_user.id, pin_id)
    return jsonify({'success': True})


# ==================== 愿望单 ====================

@bp.route('/wantlist')
@login_required
def wantlist_list():
    """愿望单"""
    entries = WantListStore(db.session).list_for_user(current_user.id)
    return jsonify([e.to_dict(with_pin=True) for e in entries])


@bp.route('/wantlist', methods=['POST'])
@login_required
def wantlist_add():
    """添加到愿望单"""
    data = parse_body(WantListAdd)

    entry, created = WantListStore(db.session).add(
        current_user.id,
        data.pin_id,
        priority=data.priority,
        max_price=data.max_price
    )
    return jsonify(entry.to_dict(with_pin=True)), 201 if created else 200


@bp.route('/wantlist/<int:pin_id>', methods=['DELETE'])
@login_required
def wantlist_remove(pin_id):
    """从愿望单移除"""
    WantListStore(db.session).remove(current_user.id, pin_id)
    return jsonify({'success': True})
