"""
기본 레퍼런스 데이터 시드
거래쌍 3개와 리워드 등급 4개를 빈 저장소에 채운다
"""

import logging

from tokenapi.database.connection import Database
from tokenapi.repositories.rewards_repository import RewardsRepository
from tokenapi.repositories.trading_pair_repository import TradingPairRepository

logger = logging.getLogger(__name__)

DEFAULT_TRADING_PAIRS = [
    # (base, quote, min, max, fee)
    ("T&E", "SOL", 100, 1_000_000, 0.001),
    ("T&E", "USDC", 100, 1_000_000, 0.001),
    ("T&E", "BTC", 100, 1_000_000, 0.001),
]

DEFAULT_REWARDS_TIERS = [
    {
        "name": "Bronze",
        "points_required": 0,
        "trading_fee_discount": 0.0,
        "additional_benefits": ["Access to basic features"],
        "icon": "🥉",
    },
    {
        "name": "Silver",
        "points_required": 1000,
        "trading_fee_discount": 0.1,
        "additional_benefits": ["10% trading fee discount", "Priority support"],
        "icon": "🥈",
    },
    {
        "name": "Gold",
        "points_required": 5000,
        "trading_fee_discount": 0.2,
        "additional_benefits": [
            "20% trading fee discount",
            "Priority support",
            "Early access to new features",
        ],
        "icon": "🥇",
    },
    {
        "name": "Platinum",
        "points_required": 10000,
        "trading_fee_discount": 0.3,
        "additional_benefits": [
            "30% trading fee discount",
            "VIP support",
            "Early access to new features",
            "Exclusive airdrops",
        ],
        "icon": "💎",
    },
]


def seed_default_data(database: Database) -> None:
    """이미 존재하는 심볼/등급은 건너뛴다"""
    with database.session() as db:
        pair_repo = TradingPairRepository(db)
        rewards_repo = RewardsRepository(db)

        created_pairs = 0
        for base, quote, min_amount, max_amount, fee in DEFAULT_TRADING_PAIRS:
            symbol = f"{base}/{quote}"
            if pair_repo.get_by_symbol(symbol):
                continue
            pair_repo.create_pair(
                base_asset=base,
                quote_asset=quote,
                pair_symbol=symbol,
                min_trade_amount=min_amount,
                max_trade_amount=max_amount,
                trading_fee=fee,
                commit=False,
            )
            created_pairs += 1

        existing_tiers = {tier.name for tier in rewards_repo.get_all_tiers()}
        created_tiers = 0
        for tier in DEFAULT_REWARDS_TIERS:
            if tier["name"] in existing_tiers:
                continue
            rewards_repo.create_tier(commit=False, **tier)
            created_tiers += 1

        db.commit()

    logger.info(
        f"Seed data loaded: {created_pairs} trading pairs, {created_tiers} rewards tiers"
    )
