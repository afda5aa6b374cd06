from typing import Optional
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict

class GenreRevenue(BaseModel):
    genre_name: str
    total_revenue: Decimal


class RankedMovie(BaseModel):
    title: str
    revenue: Decimal
    cumulative_revenue: Decimal
    revenue_rank: int


class AverageRevenue(BaseModel):
    genre_id: int
    average_revenue: Optional[Decimal] = None


class ErrorLogEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    error_id: int
    error_datetime: datetime
    error_message: str
    error_severity: int
    error_state: int


class SeedResult(BaseModel):
    movies: int
    genres: int
    countries: int
