"""
Infrastructure adapter: DynamoDB (PynamoDB) → IPriceHistoryRepository.
Records expire through the table's TTL attribute; nothing is deleted here.
"""

from datetime import datetime, timezone

from crypto_tracker.domain.entities.price import PriceRecord
from crypto_tracker.domain.ports.price_history_repository_port import IPriceHistoryRepository
from crypto_tracker.infrastructure.persistence.dynamodb_models import PriceHistoryModel


class DynamoDBPriceHistoryRepository(IPriceHistoryRepository):
    def __init__(self, model: type[PriceHistoryModel] = PriceHistoryModel) -> None:
        self._model = model

    def save(self, record: PriceRecord) -> None:
        self._model(
            symbol=record.symbol,
            timestamp=record.timestamp,
            spot_price=record.spot_price,
            buy_price=record.buy_price,
            sell_price=record.sell_price,
            daily_change_percent=record.daily_change_percent,
            ttl=(
                datetime.fromtimestamp(record.ttl, tz=timezone.utc)
                if record.ttl is not None
                else None
            ),
        ).save()

    def find_since(self, symbol: str, since: datetime) -> list[PriceRecord]:
        items = self._model.query(
            symbol,
            self._model.timestamp >= since,
            scan_index_forward=True,
        )
        return [self._to_entity(item) for item in items]

    @staticmethod
    def _to_entity(item: PriceHistoryModel) -> PriceRecord:
        return PriceRecord(
            symbol=item.symbol,
            timestamp=item.timestamp,
            spot_price=item.spot_price,
            buy_price=item.buy_price,
            sell_price=item.sell_price,
            daily_change_percent=item.daily_change_percent,
            ttl=int(item.ttl.timestamp()) if item.ttl is not None else None,
        )
