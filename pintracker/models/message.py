"""
站内信模型
"""
from pintracker import db
from datetime import datetime


class Message(db.Model):
    """用户之间的私信"""
    __tablename__ = 'messages'

    id = db.Column(db.Integer, primary_key=True)

    sender_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    receiver_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    content = db.Column(db.Text, nullable=False)

    # 已读标记, 只会从 False 变为 True
    is_read = db.Column(db.Boolean, default=False, nullable=False)

    sent_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    # 关系
    sender = db.relationship('User', foreign_keys=[sender_id])
    receiver = db.relationship('User', foreign_keys=[receiver_id])

    def __repr__(self):
        return f'<Message {self.sender_id}->{self.receiver_id}>'

    def to_dict(self, with_sender=False):
        data = {
            'id': self.id,
            'senderId': self.sender_id,
            'receiverId': self.receiver_id,
            'content': self.content,
            'isRead': bool(self.is_read),
            'sentAt': self.sent_at.isoformat() if self.sent_at else None,
        }
        if with_sender:
            data['sender'] = self.sender.to_dict()
        return data
