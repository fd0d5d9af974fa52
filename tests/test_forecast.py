import pytest

from cashpulse.analytics.forecast import generate_forecast
from cashpulse.analytics.metrics import compute_metrics, empty_metrics
from cashpulse.analytics.summary import build_financial_summary


def metrics(revenue, expenses, rev_growth=0.0, exp_growth=0.0, runway=0.0):
    out = empty_metrics()
    out.update(
        totalRevenue=revenue,
        totalExpenses=expenses,
        netCashFlow=revenue - expenses,
        revenueGrowthRate=rev_growth,
        expenseGrowthRate=exp_growth,
        runway=runway,
    )
    return out


def test_flat_growth_projects_monthly_average():
    out = generate_forecast(metrics(12000, 6000, runway=12))
    assert out["nextMonthRevenue"] == pytest.approx(1000)
    assert out["nextMonthExpenses"] == pytest.approx(500)
    assert out["quarterlyForecast"] == pytest.approx({"revenue": 3000, "expenses": 1500, "netCashFlow": 1500})
    assert out["yearlyForecast"] == pytest.approx({"revenue": 12000, "expenses": 6000, "netCashFlow": 6000})
    assert out["burnRate"] == pytest.approx(-500)
    assert out["runwayStatus"] == "healthy"


def test_growth_rates_compound_one_month():
    out = generate_forecast(metrics(12000, 12000, rev_growth=10, exp_growth=-50))
    assert out["nextMonthRevenue"] == pytest.approx(1100)
    assert out["nextMonthExpenses"] == pytest.approx(500)


@pytest.mark.parametrize("runway, status", [(6, "warning"), (6.1, "healthy"), (0, "warning")])
def test_runway_status(runway, status):
    assert generate_forecast(metrics(0, 0, runway=runway))["runwayStatus"] == status


def test_empty_metrics_forecast_is_all_zero():
    out = generate_forecast(compute_metrics([]))
    assert out["nextMonthRevenue"] == 0
    assert out["yearlyForecast"]["netCashFlow"] == 0


def test_summary_uses_computed_growth(sample_transactions):
    summary = build_financial_summary(compute_metrics(sample_transactions))
    assert summary.total_revenue == 5000
    assert summary.average_monthly_revenue == pytest.approx(5000 / 12)
    assert summary.revenue_growth_rate == 0
    assert summary.runway == pytest.approx(12)
    assert summary.to_dict()["net_cash_flow"] == 2500
