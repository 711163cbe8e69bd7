"""
数据模型模块
"""
from pintracker.models.user import User
from pintracker.models.pin import Pin
from pintracker.models.price import PriceHistory
from pintracker.models.collection import UserPin, WantListItem
from pintracker.models.message import Message

__all__ = [
    'User',
    'Pin',
    'PriceHistory',
    'UserPin', 'WantListItem',
    'Message',
]
