from unittest.mock import patch

import pytest

from tokenapi.core.exceptions import BusinessLogicError, ConflictError, NotFoundError
from tokenapi.models.trading import OrderSide, OrderStatus, OrderType
from tokenapi.repositories.order_repository import OrderRepository
from tokenapi.repositories.rewards_repository import RewardsRepository
from tokenapi.repositories.trade_repository import TradeRepository
from tokenapi.repositories.user_repository import UserRepository
from tokenapi.schemas.trading import OrderCreate, TradingPairCreate, TradingPairUpdate
from tokenapi.services.trading_service import TradingService


@pytest.fixture
def trading_service(db, settings):
    return TradingService(db, settings)


@pytest.fixture
def alice(db):
    return UserRepository(db).create_user(
        username="alice", email="alice@x.com", password="password123"
    )


def market_order(amount, side="Buy", price=None, pair_id=1):
    return OrderCreate(
        trading_pair_id=pair_id, type="Market", side=side, amount=amount, price=price
    )


class TestMarketOrders:
    """시장가 주문 셀프 체결"""

    def test_market_buy_self_fills(self, db, settings, trading_service, alice):
        # Act
        result = trading_service.place_order(alice.id, market_order(500))

        # Assert
        assert result.order.type == OrderType.MARKET
        assert result.order.status == OrderStatus.FILLED
        assert result.order.filled == 500

        trade = result.trade
        assert trade.buy_order_id == result.order.id
        assert trade.price == pytest.approx(settings.DEFAULT_TOKEN_PRICE)
        assert trade.total_value == pytest.approx(500 * settings.DEFAULT_TOKEN_PRICE)
        assert trade.fee == pytest.approx(trade.total_value * 0.001)

        counter_orders = OrderRepository(db).get_user_orders(settings.SYSTEM_USER_ID)
        assert len(counter_orders) == 1
        counter = counter_orders[0]
        assert counter.id == trade.sell_order_id
        assert counter.side == OrderSide.SELL
        assert counter.type == OrderType.LIMIT
        assert counter.status == OrderStatus.FILLED
        assert counter.filled == 500

        user = UserRepository(db).get_by_id(alice.id)
        assert user.total_trading_volume == pytest.approx(trade.total_value)

    def test_market_buy_records_rewards_event(self, db, trading_service, alice):
        result = trading_service.place_order(alice.id, market_order(500))

        events = RewardsRepository(db).get_user_events(alice.id)

        # 거래대금이 100 미만이면 0 포인트 이벤트
        assert result.points_earned == 0
        assert len(events) == 1
        assert events[0].event_type == "Trade"
        assert events[0].points == 0
        assert events[0].additional_data == {
            "trade_id": result.trade.id,
            "order_id": result.order.id,
        }

    def test_market_sell_uses_order_as_sell_side(self, trading_service, alice):
        result = trading_service.place_order(alice.id, market_order(1000, side="Sell"))

        assert result.trade.sell_order_id == result.order.id
        assert result.trade.buy_order_id != result.order.id

    def test_fee_discount_and_points_follow_tier(self, db, trading_service, alice):
        # Arrange: Silver 등급 (10% 수수료 할인)
        rewards = RewardsRepository(db)
        rewards.create_event(
            user_id=alice.id, event_type="Bonus", points=1000, description="welcome"
        )

        # Act
        result = trading_service.place_order(
            alice.id, market_order(1000, price=1.0)
        )

        # Assert
        assert result.trade.total_value == pytest.approx(1000.0)
        assert result.trade.fee == pytest.approx(0.9)
        assert result.points_earned == 10
        assert UserRepository(db).get_by_id(alice.id).rewards_points == 1010

    def test_failed_market_order_leaves_store_unchanged(
        self, db, trading_service, alice
    ):
        with patch.object(
            trading_service.rewards_repo,
            "create_event",
            side_effect=RuntimeError("boom"),
        ):
            with pytest.raises(RuntimeError):
                trading_service.place_order(alice.id, market_order(500))

        assert OrderRepository(db).count() == 0
        assert TradeRepository(db).count() == 0
        assert UserRepository(db).get_by_id(alice.id).total_trading_volume == 0.0


class TestLimitOrders:
    def test_limit_order_is_stored_open(self, db, trading_service, alice):
        payload = OrderCreate(
            trading_pair_id=1, type="Limit", side="Buy", amount=200, price=0.00003
        )

        result = trading_service.place_order(alice.id, payload)

        assert result.order.status == OrderStatus.OPEN
        assert result.order.filled == 0.0
        assert result.trade is None
        assert result.points_earned == 0
        assert TradeRepository(db).count() == 0

    def test_limit_order_requires_price(self, db, trading_service, alice):
        payload = OrderCreate(trading_pair_id=1, type="Limit", side="Buy", amount=200)

        with pytest.raises(BusinessLogicError) as exc_info:
            trading_service.place_order(alice.id, payload)

        assert exc_info.value.status_code == 400
        assert OrderRepository(db).count() == 0


class TestOrderValidation:
    @pytest.mark.parametrize("amount", [50, 2_000_000])
    def test_amount_outside_pair_bounds(self, db, trading_service, alice, amount):
        with pytest.raises(BusinessLogicError) as exc_info:
            trading_service.place_order(alice.id, market_order(amount))

        assert exc_info.value.error_code == "TRADING_003"
        assert OrderRepository(db).count() == 0

    def test_unknown_pair(self, trading_service, alice):
        with pytest.raises(NotFoundError):
            trading_service.place_order(alice.id, market_order(500, pair_id=99))


class TestTradingPairs:
    def test_seeded_pairs(self, trading_service):
        pairs = trading_service.get_active_pairs()

        assert [p.pair_symbol for p in pairs] == ["T&E/SOL", "T&E/USDC", "T&E/BTC"]
        assert all(p.min_trade_amount == 100 for p in pairs)

    def test_inactive_pairs_hidden_from_active_list(self, trading_service):
        trading_service.update_pair(3, TradingPairUpdate(is_active=False))

        assert len(trading_service.get_active_pairs()) == 2
        assert len(trading_service.get_all_pairs()) == 3

    def test_create_pair_derives_symbol(self, trading_service):
        pair = trading_service.create_pair(
            TradingPairCreate(base_asset="T&E", quote_asset="ETH", min_trade_amount=10)
        )

        assert pair.pair_symbol == "T&E/ETH"
        assert trading_service.get_pair_by_symbol("T&E/ETH").id == pair.id

    def test_duplicate_pair_symbol(self, trading_service):
        with pytest.raises(ConflictError):
            trading_service.create_pair(
                TradingPairCreate(
                    base_asset="T&E", quote_asset="SOL", min_trade_amount=10
                )
            )

    def test_update_rejects_inverted_bounds(self, trading_service):
        with pytest.raises(BusinessLogicError):
            trading_service.update_pair(1, TradingPairUpdate(max_trade_amount=50))

    def test_update_missing_pair(self, trading_service):
        with pytest.raises(NotFoundError):
            trading_service.update_pair(42, TradingPairUpdate(trading_fee=0.002))


class TestVolumeLeaderboard:
    def test_ranked_by_volume(self, db, trading_service, alice):
        bob = UserRepository(db).create_user(
            username="bob", email="bob@x.com", password="password123"
        )
        trading_service.place_order(alice.id, market_order(100, price=1.0))
        trading_service.place_order(bob.id, market_order(300, price=1.0))

        board = trading_service.get_volume_leaderboard(10)

        assert [(e.rank, e.username) for e in board] == [(1, "bob"), (2, "alice")]
        assert board[0].total_trading_volume == pytest.approx(300.0)
