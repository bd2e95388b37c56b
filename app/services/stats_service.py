# app/services/stats_service.py
"""
Dashboard aggregates: cars per status, stock by model, and sales by model and
by salesperson. A sale is a DELIVERED match with a sale date; year/month
filters apply to that sale date.
"""

from datetime import date
from typing import Optional
from sqlalchemy import func
from sqlalchemy.orm import Session
from app.models.car import Car
from app.models.enums import CarStatus, MatchStatus
from app.models.match import Match


def _sale_range(year: Optional[int], month: Optional[int]):
    if year is None:
        return None, None
    if month is None:
        return date(year, 1, 1), date(year + 1, 1, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return date(year, month, 1), end


def _counts(rows, by_label: bool = False):
    items = [{"label": label or "-", "count": count} for label, count in rows]
    if by_label:
        return sorted(items, key=lambda i: i["label"])
    return sorted(items, key=lambda i: (-i["count"], i["label"]))


def summary(db: Session, year: Optional[int] = None, month: Optional[int] = None) -> dict:
    status_rows = db.query(Car.status, func.count(Car.id)).group_by(Car.status).all()
    status_counts = {s.value: 0 for s in CarStatus}
    for status, count in status_rows:
        status_counts[CarStatus(status).value] = count

    stock_rows = (
        db.query(Car.model, func.count(Car.id))
        .filter(Car.status == CarStatus.IN_STOCK)
        .group_by(Car.model)
        .all()
    )

    sales = (
        db.query(Match)
        .join(Car, Match.car_id == Car.id)
        .filter(Match.status == MatchStatus.DELIVERED, Match.sale_date != None)  # noqa: E711
    )
    start, end = _sale_range(year, month)
    if start is not None:
        sales = sales.filter(Match.sale_date >= start, Match.sale_date < end)

    by_model = sales.with_entities(Car.model, func.count(Match.id)).group_by(Car.model).all()
    by_salesperson = sales.with_entities(Match.salesperson, func.count(Match.id)).group_by(Match.salesperson).all()

    return {
        "year": year,
        "month": month,
        "total_cars": sum(status_counts.values()),
        "status_counts": status_counts,
        "stock_by_model": _counts(stock_rows, by_label=True),
        "sales_by_model": _counts(by_model),
        "sales_by_salesperson": _counts(by_salesperson),
    }
