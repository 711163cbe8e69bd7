"""
站内信路由
"""
from flask import Blueprint, jsonify
from flask_login import current_user, login_required

from pintracker import db
from pintracker.schemas import MessageCreate, parse_body
from pintracker.stores.messages import MessageStore

bp = Blueprint('messages', __name__, url_prefix='/api/messages')


@bp.route('')
@login_required
def inbox():
    """收件箱"""
    messages = MessageStore(db.session).list_for_user(current_user.id)
    return jsonify([m.to_dict(with_sender=True) for m in messages])


@bp.route('/sent')
@login_required
def sent():
    """已发送"""
    messages = MessageStore(db.session).list_sent(current_user.id)
    return jsonify([m.to_dict() for m in messages])


@bp.route('/unread-count')
@login_required
def unread_count():
    return jsonify({'count': MessageStore(db.session).unread_count(current_user.id)})


@bp.route('', methods=['POST'])
@login_required
def send():
    """发送私信"""
    data = parse_body(MessageCreate)
    message = MessageStore(db.session).send(current_user.id, data.receiver_id, data.content)
    return jsonify(message.to_dict()), 201


@bp.route('/<int:message_id>/read', methods=['PATCH'])
@login_required
def mark_read(message_id):
    """标记已读"""
    message = MessageStore(db.session).mark_read(message_id, current_user.id)
    return jsonify(message.to_dict())
