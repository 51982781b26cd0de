from datetime import timedelta

import pytest

from tokenapi.models.trading import OrderStatus, OrderType
from tokenapi.repositories.news_repository import NewsRepository
from tokenapi.repositories.order_repository import OrderRepository
from tokenapi.repositories.rewards_repository import RewardsRepository
from tokenapi.repositories.subscriber_repository import SubscriberRepository
from tokenapi.repositories.trade_repository import TradeRepository
from tokenapi.repositories.trading_pair_repository import TradingPairRepository
from tokenapi.repositories.user_repository import UserRepository
from tokenapi.utils.date_utils import utcnow


@pytest.fixture
def users(db):
    return UserRepository(db)


@pytest.fixture
def orders(db):
    return OrderRepository(db)


@pytest.fixture
def trades(db):
    return TradeRepository(db)


@pytest.fixture
def rewards(db):
    return RewardsRepository(db)


@pytest.fixture
def alice(users):
    return users.create_user(username="alice", email="alice@x.com", password="pw123456")


class TestEntityStore:
    """기본 CRUD 동작"""

    def test_create_then_get_round_trip(self, users, alice):
        fetched = users.get_by_id(alice.id)

        assert fetched == alice
        assert fetched.username == "alice"
        assert fetched.created_at is not None
        assert fetched.updated_at is not None

    def test_get_twice_returns_identical_records(self, users, alice):
        assert users.get_by_id(alice.id) == users.get_by_id(alice.id)

    def test_missing_id_returns_none(self, users):
        assert users.get_by_id(12345) is None
        assert users.update(12345, full_name="nobody") is None

    def test_ids_are_monotonic_per_type(self, users):
        ids = [
            users.create_user(username=f"user{i}", email=f"u{i}@x.com", password="pw").id
            for i in range(3)
        ]
        assert ids == sorted(ids)
        assert len(set(ids)) == 3

    def test_count_and_exists_with_filters(self, users, alice):
        assert users.count() == 1
        assert users.count({"username": "alice"}) == 1
        assert users.exists({"email": "alice@x.com"}) is True
        assert users.exists({"email": "ghost@x.com"}) is False

    def test_update_merges_partial_fields(self, users, alice):
        updated = users.update(alice.id, full_name="Alice Liddell")

        assert updated.full_name == "Alice Liddell"
        assert updated.email == alice.email
        assert updated.updated_at >= alice.updated_at


class TestUserRepository:
    def test_create_user_defaults(self, alice):
        # 시나리오 1: 첫 사용자
        assert alice.id == 1
        assert alice.rewards_points == 0
        assert alice.total_trading_volume == 0.0
        assert alice.referral_code == "ALICE1"
        assert alice.is_verified is False
        assert alice.verification_token

    def test_lookups(self, users):
        bob = users.create_user(
            username="bob", email="bob@x.com", password="pw", wallet_address="So1Bob"
        )

        assert users.get_by_username("bob").id == bob.id
        assert users.get_by_email("bob@x.com").id == bob.id
        assert users.get_by_wallet_address("So1Bob").id == bob.id
        assert users.get_by_username("nobody") is None

    def test_verify_user(self, users, alice):
        verified = users.verify_user(alice.verification_token)

        assert verified.is_verified is True
        assert verified.verification_token is None
        assert users.verify_user(alice.verification_token) is None

    def test_reset_token_flow(self, users, alice):
        # 시나리오 3
        token = users.generate_reset_token("alice@x.com")
        stored = users.get_by_id(alice.id)
        assert stored.reset_password_token == token
        assert stored.reset_password_expires - utcnow() <= timedelta(hours=1)

        assert users.reset_password(token, "newpw12345") is True
        assert users.get_by_id(alice.id).password == "newpw12345"
        assert users.reset_password(token, "again12345") is False

        cleared = users.get_by_id(alice.id)
        assert cleared.reset_password_token is None
        assert cleared.reset_password_expires is None

    def test_reset_token_unknown_email(self, users):
        assert users.generate_reset_token("ghost@x.com") is None

    def test_expired_reset_token_is_rejected(self, users, alice):
        token = users.generate_reset_token(
            "alice@x.com", now=utcnow() - timedelta(hours=2)
        )

        assert users.reset_password(token, "newpw12345") is False
        assert users.get_by_id(alice.id).password == "pw123456"

    def test_rewards_leaderboard(self, users, rewards):
        # 시나리오 5
        points = {"u150": 150, "u2000": 2000, "u50": 50}
        for name, value in points.items():
            user = users.create_user(username=name, email=f"{name}@x.com", password="pw")
            rewards.create_event(
                user_id=user.id, event_type="Bonus", points=value, description="seed"
            )

        top = users.get_users_by_rewards_points(2)

        assert [u.rewards_points for u in top] == [2000, 150]

    def test_leaderboard_ties_favor_lower_id(self, users):
        first = users.create_user(username="first", email="f@x.com", password="pw")
        second = users.create_user(username="second", email="s@x.com", password="pw")
        users.add_trading_volume(second.id, 10.0)
        users.add_trading_volume(first.id, 10.0)

        top = users.get_users_by_trade_volume(2)

        assert [u.id for u in top] == [first.id, second.id]


class TestOrderAndTradeLedger:
    @pytest.fixture
    def pair(self, db):
        return TradingPairRepository(db).get_by_symbol("T&E/SOL")

    @pytest.fixture
    def bob(self, users):
        return users.create_user(username="bob", email="bob@x.com", password="pw")

    def test_new_order_status(self, orders, alice, pair):
        market = orders.create_order(
            user_id=alice.id,
            trading_pair_id=pair.id,
            type=OrderType.MARKET,
            side="Buy",
            amount=500,
        )
        limit = orders.create_order(
            user_id=alice.id,
            trading_pair_id=pair.id,
            type=OrderType.LIMIT,
            side="Sell",
            amount=500,
            price=0.00004,
        )

        assert market.status == OrderStatus.FILLED
        assert market.filled == 0.0
        assert limit.status == OrderStatus.OPEN

    def test_trade_updates_orders_and_volume(
        self, users, orders, trades, alice, bob, pair
    ):
        buy = orders.create_order(
            user_id=alice.id, trading_pair_id=pair.id, type="Limit",
            side="Buy", amount=100, price=2.0,
        )
        sell = orders.create_order(
            user_id=bob.id, trading_pair_id=pair.id, type="Limit",
            side="Sell", amount=100, price=2.0,
        )

        trades.create_trade(
            buy_order_id=buy.id, sell_order_id=sell.id, trading_pair_id=pair.id,
            price=2.0, amount=40, total_value=80.0, fee=0.08,
        )
        partial_buy = orders.get_by_id(buy.id)
        assert partial_buy.filled == 40
        assert partial_buy.status == OrderStatus.PARTIAL
        assert orders.get_by_id(sell.id).filled == 40
        assert users.get_by_id(alice.id).total_trading_volume == pytest.approx(80.0)
        assert users.get_by_id(bob.id).total_trading_volume == pytest.approx(80.0)

        trades.create_trade(
            buy_order_id=buy.id, sell_order_id=sell.id, trading_pair_id=pair.id,
            price=2.0, amount=60, total_value=120.0, fee=0.12,
        )
        for order_id in (buy.id, sell.id):
            order = orders.get_by_id(order_id)
            assert order.filled == 100
            assert order.filled <= order.amount
            assert order.status == OrderStatus.FILLED
        assert users.get_by_id(alice.id).total_trading_volume == pytest.approx(200.0)
        assert users.get_by_id(bob.id).total_trading_volume == pytest.approx(200.0)

    def test_trade_with_dangling_references_is_recorded(self, trades, pair):
        trade = trades.create_trade(
            buy_order_id=9001, sell_order_id=9002, trading_pair_id=pair.id,
            price=1.0, amount=1, total_value=1.0, fee=0.0,
        )

        assert trades.get_by_id(trade.id) == trade

    def test_user_trades_cover_both_sides(self, orders, trades, alice, bob, pair):
        buy = orders.create_order(
            user_id=alice.id, trading_pair_id=pair.id, type="Limit",
            side="Buy", amount=100, price=1.0,
        )
        sell = orders.create_order(
            user_id=bob.id, trading_pair_id=pair.id, type="Limit",
            side="Sell", amount=100, price=1.0,
        )
        trade = trades.create_trade(
            buy_order_id=buy.id, sell_order_id=sell.id, trading_pair_id=pair.id,
            price=1.0, amount=100, total_value=100.0, fee=0.1,
        )

        assert [t.id for t in trades.get_user_trades(alice.id)] == [trade.id]
        assert [t.id for t in trades.get_user_trades(bob.id)] == [trade.id]
        assert trades.get_user_trades(4242) == []
        assert [t.id for t in trades.get_trades_by_trading_pair(pair.id)] == [trade.id]

    def test_orders_by_pair_and_status(self, orders, alice, pair):
        open_order = orders.create_order(
            user_id=alice.id, trading_pair_id=pair.id, type="Limit",
            side="Buy", amount=100, price=1.0,
        )
        orders.create_order(
            user_id=alice.id, trading_pair_id=pair.id, type="Market",
            side="Buy", amount=100,
        )

        open_orders = orders.get_orders_by_trading_pair(pair.id, OrderStatus.OPEN)

        assert [o.id for o in open_orders] == [open_order.id]
        assert len(orders.get_orders_by_trading_pair(pair.id)) == 2
        assert len(orders.get_all_orders(OrderStatus.FILLED)) == 1
        assert len(orders.get_user_orders(alice.id)) == 2


class TestRewardsRepository:
    def test_points_equal_sum_of_events(self, users, rewards, alice):
        for value in (150, 40, -20, 0):
            rewards.create_event(
                user_id=alice.id, event_type="Bonus", points=value, description="x"
            )

        events = rewards.get_user_events(alice.id)
        assert users.get_by_id(alice.id).rewards_points == sum(e.points for e in events)
        assert users.get_by_id(alice.id).rewards_points == 170

    def test_event_for_missing_user_is_stored(self, rewards):
        event = rewards.create_event(
            user_id=777, event_type="Bonus", points=5, description="orphan"
        )

        assert rewards.get_event(event.id) == event

    def test_user_tier_scenario(self, rewards, alice):
        # 시나리오 1: 150 포인트는 Bronze
        rewards.create_event(
            user_id=alice.id, event_type="Trade", points=150, description="trade"
        )

        assert rewards.get_user_tier(alice.id).name == "Bronze"

    def test_user_tier_moves_up_with_points(self, rewards, alice):
        rewards.create_event(
            user_id=alice.id, event_type="Bonus", points=1000, description="x"
        )
        assert rewards.get_user_tier(alice.id).name == "Silver"

        rewards.create_event(
            user_id=alice.id, event_type="Bonus", points=9000, description="x"
        )
        assert rewards.get_user_tier(alice.id).name == "Platinum"

    def test_user_tier_for_missing_user(self, rewards):
        assert rewards.get_user_tier(999) is None

    def test_seeded_tiers(self, rewards):
        tiers = rewards.get_all_tiers()

        assert [t.name for t in tiers] == ["Bronze", "Silver", "Gold", "Platinum"]
        assert tiers[1].trading_fee_discount == pytest.approx(0.1)
        assert tiers[3].icon == "💎"


class TestNewsAndSubscribers:
    def test_published_articles_newest_first(self, db):
        news = NewsRepository(db)
        now = utcnow()
        old = news.create_article(
            title="old", content="c", is_published=True,
            publish_date=now - timedelta(days=2),
        )
        new = news.create_article(
            title="new", content="c", is_published=True, publish_date=now,
        )
        news.create_article(title="draft", content="c", is_published=False)

        published = news.get_published()

        assert [a.id for a in published] == [new.id, old.id]
        assert [a.id for a in news.get_published(limit=1)] == [new.id]
        assert len(news.get_all()) == 3

    def test_unsubscribe_is_soft_delete(self, db):
        subscribers = SubscriberRepository(db)
        created = subscribers.create_subscriber("bob@x.com")

        assert subscribers.unsubscribe("bob@x.com") is True
        assert subscribers.get_active_subscribers() == []
        assert subscribers.get_by_email("bob@x.com").is_active is False
        assert subscribers.unsubscribe("ghost@x.com") is False

        reactivated = subscribers.reactivate("bob@x.com")
        assert reactivated.id == created.id
        assert reactivated.is_active is True
