from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tokenapi.config import Settings
from tokenapi.database.session import get_db
from tokenapi.deps import get_settings
from tokenapi.models import NewsArticle, Order, Subscriber, Trade, TradingPair, User
from tokenapi.schemas.health import HealthCheckResponse
from tokenapi.utils.date_utils import utcnow

router = APIRouter()

COUNTED_ENTITIES = {
    "users": User,
    "trading_pairs": TradingPair,
    "orders": Order,
    "trades": Trade,
    "news_articles": NewsArticle,
    "subscribers": Subscriber,
}


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> HealthCheckResponse:
    """Health check endpoint."""

    return HealthCheckResponse(
        environment=settings.ENVIRONMENT,
        timestamp=utcnow(),
        entity_counts={
            name: db.query(model).count() for name, model in COUNTED_ENTITIES.items()
        },
    )
