"""
数据访问层 - 每个实体一个小型 store, 只依赖 SQLAlchemy session
"""
from pintracker.stores.catalog import CatalogStore
from pintracker.stores.collection import CollectionStore, WantListStore
from pintracker.stores.messages import MessageStore
from pintracker.stores.users import UserStore

__all__ = [
    'CatalogStore',
    'CollectionStore', 'WantListStore',
    'MessageStore',
    'UserStore',
]
