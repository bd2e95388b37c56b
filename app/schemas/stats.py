# app/schemas/stats.py
from pydantic import BaseModel
from typing import Dict, List, Optional


class CountItem(BaseModel):
    label: str
    count: int


class StatsSummaryOut(BaseModel):
    year: Optional[int]
    month: Optional[int]
    total_cars: int
    status_counts: Dict[str, int]
    stock_by_model: List[CountItem]
    sales_by_model: List[CountItem]
    sales_by_salesperson: List[CountItem]
