"""
数据模型与数据访问测试
"""
import random
from datetime import date
from unittest.mock import MagicMock

import pytest

from pintracker import create_app, db
from pintracker.errors import AuthorizationError, NotFoundError, ValidationError
from pintracker.importer import import_listing, listing_to_pin_data
from pintracker.models.pin import Pin
from pintracker.models.price import PriceHistory
from pintracker.models.user import User
from pintracker.seed import SAMPLE_PINS, HISTORY_DAYS, reseed_database, seed_sample_data, synthetic_prices
from pintracker.stores import CatalogStore, CollectionStore, MessageStore, UserStore, WantListStore


@pytest.fixture
def app():
    """创建测试应用"""
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.drop_all()


def _create_pin(name='Stitch with Dole Whip', value=28.99):
    return CatalogStore(db.session).create_pin({
        'name': name,
        'collection': 'Disney Food',
        'category': 'Characters',
        'release_date': date(2022, 6, 1),
        'current_value': value,
    })


def _create_user(username='alice'):
    return UserStore(db.session).create(username, 'secret123')


class TestUser:
    """用户模型测试"""

    def test_password_hashed(self, app):
        user = _create_user()

        assert user.password_hash != 'secret123'
        assert user.check_password('secret123')
        assert not user.check_password('wrong')

    def test_to_dict_has_no_password(self, app):
        data = _create_user().to_dict()

        assert 'password' not in data
        assert 'password_hash' not in data
        assert data['username'] == 'alice'
        assert data['displayName'] == 'alice'

    def test_duplicate_username(self, app):
        _create_user()
        with pytest.raises(ValidationError):
            _create_user()

    def test_authenticate(self, app):
        _create_user()
        store = UserStore(db.session)

        assert store.authenticate('alice', 'secret123') is not None
        assert store.authenticate('alice', 'nope') is None
        assert store.authenticate('bob', 'secret123') is None

    def test_set_admin(self, app):
        _create_user()
        user = UserStore(db.session).set_admin('alice')

        assert user.is_admin


class TestCatalogStore:
    """图鉴数据访问测试"""

    def test_create_pin(self, app):
        pin = _create_pin()

        assert pin.id is not None
        assert pin.to_dict()['releaseDate'] == '2022-06-01'

    def test_get_missing_pin(self, app):
        with pytest.raises(NotFoundError):
            CatalogStore(db.session).get_pin(999)

    def test_list_filters(self, app):
        _create_pin('Stitch with Dole Whip')
        _create_pin('Disney Monorail')
        store = CatalogStore(db.session)

        assert len(store.list_pins()) == 2
        assert [p.name for p in store.list_pins(query='monorail')] == ['Disney Monorail']
        assert len(store.list_pins(collection='Disney Food')) == 2
        assert store.list_pins(category='Villains') == []

    def test_record_price_updates_value_and_history(self, app):
        """当前价与价格历史一起写入"""
        pin = _create_pin()
        store = CatalogStore(db.session)
        store.record_price(pin.id, 31.5)

        history = store.get_price_history(pin.id)
        assert db.session.get(Pin, pin.id).current_value == 31.5
        assert [h.price for h in history] == [31.5]
        assert history[0].source == 'eBay'

    def test_empty_price_history(self, app):
        pin = _create_pin()

        assert CatalogStore(db.session).get_price_history(pin.id) == []

    def test_stats(self, app):
        pin = _create_pin()
        alice = _create_user('alice')
        bob = _create_user('bob')

        CollectionStore(db.session).add(alice.id, pin.id)
        WantListStore(db.session).add(alice.id, pin.id)
        WantListStore(db.session).add(bob.id, pin.id)

        assert CatalogStore(db.session).get_stats(pin.id) == {'haveCount': 1, 'wantCount': 2}


class TestCollectionStore:
    """收藏 / 愿望单测试"""

    def test_add_is_idempotent(self, app):
        pin = _create_pin()
        user = _create_user()
        store = CollectionStore(db.session)

        first, created = store.add(user.id, pin.id, notes='from Epcot')
        second, created_again = store.add(user.id, pin.id)

        assert created and not created_again
        assert first.id == second.id
        assert len(store.list_for_user(user.id)) == 1

    def test_add_missing_pin(self, app):
        user = _create_user()

        with pytest.raises(NotFoundError):
            CollectionStore(db.session).add(user.id, 42)

    def test_remove(self, app):
        pin = _create_pin()
        user = _create_user()
        store = CollectionStore(db.session)
        store.add(user.id, pin.id)

        assert store.remove(user.id, pin.id)
        assert store.list_for_user(user.id) == []
        assert not store.remove(user.id, pin.id)

    def test_update(self, app):
        pin = _create_pin()
        user = _create_user()
        store = CollectionStore(db.session)
        store.add(user.id, pin.id)

        entry = store.update(user.id, pin.id, purchase_price=12.0, for_trade=True)
        assert entry.purchase_price == 12.0
        assert entry.for_trade

    def test_want_list_priority(self, app):
        pin = _create_pin()
        user = _create_user()
        entry, _ = WantListStore(db.session).add(user.id, pin.id, priority=3, max_price=40)

        assert entry.to_dict()['priority'] == 3
        assert entry.to_dict()['maxPrice'] == 40


class TestMessageStore:
    """站内信测试"""

    def test_send_and_read(self, app):
        alice = _create_user('alice')
        bob = _create_user('bob')
        store = MessageStore(db.session)

        message = store.send(alice.id, bob.id, 'Trade my Jafar?')
        assert message.is_read is False
        assert store.unread_count(bob.id) == 1

        store.mark_read(message.id, bob.id)
        store.mark_read(message.id, bob.id)
        assert store.unread_count(bob.id) == 0
        assert store.list_for_user(bob.id)[0].is_read is True

    def test_only_receiver_marks_read(self, app):
        alice = _create_user('alice')
        bob = _create_user('bob')
        store = MessageStore(db.session)
        message = store.send(alice.id, bob.id, 'hi')

        with pytest.raises(AuthorizationError):
            store.mark_read(message.id, alice.id)

    def test_send_to_missing_user(self, app):
        alice = _create_user('alice')

        with pytest.raises(NotFoundError):
            MessageStore(db.session).send(alice.id, 999, 'hi')


class TestSeed:
    """示例数据测试"""

    def test_synthetic_prices(self):
        points = synthetic_prices(40.0, rng=random.Random(1))

        assert len(points) == HISTORY_DAYS
        assert [d for d, _ in points] == sorted(d for d, _ in points)
        # 80% 起步, 最后一天约 110%, 噪声 ±2.5
        assert 32 - 2.5 <= points[0][1] <= 32 + 0.4 + 2.5
        assert 44 - 2.5 <= points[-1][1] <= 44 + 2.5

    def test_seed_only_when_empty(self, app):
        assert seed_sample_data(rng=random.Random(0)) == len(SAMPLE_PINS)
        assert seed_sample_data() == 0

        assert Pin.query.count() == len(SAMPLE_PINS)
        assert PriceHistory.query.count() == len(SAMPLE_PINS) * HISTORY_DAYS

    def test_reseed_replaces_catalog(self, app):
        pin = _create_pin('Custom Pin')
        user = _create_user()
        CollectionStore(db.session).add(user.id, pin.id)

        reseed_database(rng=random.Random(0))

        assert Pin.query.count() == len(SAMPLE_PINS)
        assert Pin.query.filter_by(name='Custom Pin').first() is None
        assert CollectionStore(db.session).list_for_user(user.id) == []
        assert User.query.count() == 1


class TestImporter:
    """eBay 商品导入测试"""

    def test_import_commits_through_store_session(self, app):
        store = CatalogStore(MagicMock(wraps=db.session))
        pin, created = import_listing(listing_to_pin_data('Disney Pin Ursula', price=12.5), store=store)

        assert created
        store.session.commit.assert_called_once()
        assert pin.collection == 'Disney Villains'
        assert [h.price for h in CatalogStore(db.session).get_price_history(pin.id)] == [12.5]

    def test_import_skips_existing_name(self, app):
        existing = _create_pin('Disney Monorail')
        pin, created = import_listing(listing_to_pin_data('disney monorail', price=40))

        assert not created
        assert pin.id == existing.id
        assert Pin.query.count() == 1
