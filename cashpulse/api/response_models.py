"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Direction = Literal["increasing", "decreasing", "stable"]
Priority = Literal["high", "medium", "low"]


class HealthResponse(BaseModel):
    status: str
    backend: str
    rows: int


class TransactionOut(BaseModel):
    date: str
    description: str
    category: str
    amount: float
    type: Literal["income", "expense"]
    status: Literal["completed", "pending"]


class UploadResponse(BaseModel):
    message: str
    count: int


class MonthlyPoint(BaseModel):
    month: str
    revenue: float
    expenses: float


class WeeklyPoint(BaseModel):
    week: str
    revenue: float
    expenses: float


class ExpenseSlice(BaseModel):
    category: str
    amount: float


class Kpis(BaseModel):
    grossMargin: float
    operatingMargin: float
    burnRate: float
    customerAcquisitionCost: float
    averageRevenuePerUser: float
    churnRate: float


class SeasonalityPoint(BaseModel):
    month: int
    factor: float


class Trends(BaseModel):
    revenueDirection: Direction
    expenseDirection: Direction
    seasonality: list[SeasonalityPoint]


class TargetArea(BaseModel):
    category: str
    issue: str
    priority: Priority
    recommendation: str


class FinancialMetricsResponse(BaseModel):
    totalRevenue: float
    totalExpenses: float
    netCashFlow: float
    runway: float
    revenueGrowthRate: float
    expenseGrowthRate: float
    monthlyData: list[MonthlyPoint]
    weeklyData: list[WeeklyPoint]
    expenseBreakdown: list[ExpenseSlice]
    kpis: Kpis
    trends: Trends
    targetAreas: list[TargetArea]


class Projection(BaseModel):
    revenue: float
    expenses: float
    netCashFlow: float


class ForecastResponse(BaseModel):
    nextMonthRevenue: float
    nextMonthExpenses: float
    quarterlyForecast: Projection
    yearlyForecast: Projection
    burnRate: float
    runwayMonths: float
    runwayStatus: Literal["healthy", "warning"]


class InsightOut(BaseModel):
    title: str
    content: str
    type: Literal["positive", "warning", "info"]
    generatedAt: str


class ReportOut(BaseModel):
    title: str
    content: str
    type: Literal["monthly", "quarterly", "yearly", "custom"]
    generatedAt: str


class ReportRequest(BaseModel):
    title: str = Field("Financial Report", min_length=1, max_length=200)
    type: Literal["monthly", "quarterly", "yearly", "custom"] = "monthly"
