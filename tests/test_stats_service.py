# tests/test_stats_service.py
"""Unit tests for dashboard aggregates."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from datetime import date

from app.models.enums import CarStatus, MatchStatus
from app.schemas.match import MatchCreate
from app.services import match_service, stats_service


def sell(db, car, sale_date, salesperson="Somchai"):
    match_service.create_match(db, MatchCreate(car_id=car.id, customer_name="Nok", salesperson=salesperson,
                                               status=MatchStatus.DELIVERED, sale_date=sale_date))


class TestStatsSummary:
    def test_empty_database(self, db):
        result = stats_service.summary(db)
        assert result["total_cars"] == 0
        assert set(result["status_counts"]) == {s.value for s in CarStatus}
        assert result["sales_by_model"] == []

    def test_counts_and_breakdowns(self, db, make_car, salesperson):
        make_car("VIN0001", status=CarStatus.WAITING_FOR_TRAILER)
        make_car("VIN0002", status=CarStatus.IN_STOCK, model="Dolphin")
        make_car("VIN0003", status=CarStatus.IN_STOCK, model="Atto 3")
        sold = make_car("VIN0004", status=CarStatus.IN_STOCK, model="Seal")
        sell(db, sold, date(2024, 5, 1))

        result = stats_service.summary(db)

        assert result["total_cars"] == 4
        assert result["status_counts"]["IN_STOCK"] == 2
        assert result["status_counts"]["SOLD"] == 1
        assert [i["label"] for i in result["stock_by_model"]] == ["Atto 3", "Dolphin"]
        assert result["sales_by_model"] == [{"label": "Seal", "count": 1}]
        assert result["sales_by_salesperson"] == [{"label": "Somchai", "count": 1}]

    def test_month_filter_uses_sale_date(self, db, make_car, salesperson):
        may = make_car("VIN0001", status=CarStatus.IN_STOCK)
        june = make_car("VIN0002", status=CarStatus.IN_STOCK)
        sell(db, may, date(2024, 5, 31))
        sell(db, june, date(2024, 6, 1))

        assert stats_service.summary(db, year=2024, month=5)["sales_by_model"] == [{"label": "Atto 3", "count": 1}]
        assert stats_service.summary(db, year=2024)["sales_by_model"] == [{"label": "Atto 3", "count": 2}]
        assert stats_service.summary(db, year=2023)["sales_by_model"] == []

    def test_december_range(self, db, make_car, salesperson):
        car = make_car("VIN0001", status=CarStatus.IN_STOCK)
        sell(db, car, date(2024, 12, 31))
        assert stats_service.summary(db, year=2024, month=12)["sales_by_salesperson"][0]["count"] == 1
