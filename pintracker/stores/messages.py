"""
站内信数据访问

轮询模式: 消息只是数据库中的行, 客户端按需拉取
"""
from sqlalchemy import func

from pintracker.errors import AuthorizationError, NotFoundError
from pintracker.models.message import Message
from pintracker.models.user import User


class MessageStore:

    def __init__(self, session):
        self.session = session

    def send(self, sender_id, receiver_id, content) -> Message:
        if self.session.get(User, receiver_id) is None:
            raise NotFoundError('Receiver not found')

        message = Message(
            sender_id=sender_id,
            receiver_id=receiver_id,
            content=content,
            is_read=False
        )
        self.session.add(message)
        self.session.commit()
        return message

    def list_for_user(self, user_id):
        """收到的消息 (含发件人), 最新的在前"""
        return self.session.query(Message)\
            .join(User, Message.sender_id == User.id)\
            .filter(Message.receiver_id == user_id)\
            .order_by(Message.sent_at.desc(), Message.id.desc())\
            .all()

    def list_sent(self, user_id):
        """发出的消息, 最新的在前"""
        return self.session.query(Message)\
            .filter(Message.sender_id == user_id)\
            .order_by(Message.sent_at.desc(), Message.id.desc())\
            .all()

    def mark_read(self, message_id, user_id) -> Message:
        """标记已读 (幂等), 只有收件人可以操作"""
        message = self.session.get(Message, message_id)
        if message is None:
            raise NotFoundError('Message not found')
        if message.receiver_id != user_id:
            raise AuthorizationError('Only the receiver can mark a message as read')

        if not message.is_read:
            message.is_read = True
            self.session.commit()
        return message

    def unread_count(self, user_id):
        return self.session.query(func.count(Message.id))\
            .filter(Message.receiver_id == user_id, Message.is_read.is_(False))\
            .scalar() or 0
