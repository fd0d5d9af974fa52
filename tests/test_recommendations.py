from cashpulse.analytics.recommendations import identify_target_areas


def kpis(burn=-1.0, gross_margin=80.0):
    return {"burnRate": burn, "grossMargin": gross_margin}


def test_healthy_business_has_no_target_areas():
    breakdown = [
        {"category": "Rent", "amount": 25},
        {"category": "Payroll", "amount": 25},
        {"category": "Software", "amount": 25},
        {"category": "Travel", "amount": 25},
    ]
    assert identify_target_areas(breakdown, kpis()) == []


def test_positive_burn_flags_cash_flow_first():
    areas = identify_target_areas([], kpis(burn=10, gross_margin=40))
    assert areas[0] == {
        "category": "Cash Flow",
        "issue": "Negative cash flow detected",
        "priority": "high",
        "recommendation": "Focus on increasing revenue or reducing operating expenses",
    }
    assert areas[1]["category"] == "Profitability"


def test_category_share_thresholds():
    breakdown = [
        {"category": "Rent", "amount": 30},
        {"category": "Payroll", "amount": 35},
        {"category": "Software", "amount": 35},
    ]
    areas = identify_target_areas(breakdown, kpis())
    # exactly 30% is not flagged
    assert [a["issue"] for a in areas] == [
        "High spending in Payroll (35.0% of total expenses)",
        "High spending in Software (35.0% of total expenses)",
    ]
    assert {a["priority"] for a in areas} == {"medium"}
    assert areas[0]["recommendation"] == "Review and optimize Payroll expenses"


def test_category_just_over_threshold_is_flagged():
    breakdown = [
        {"category": "Rent", "amount": 31},
        {"category": "Payroll", "amount": 23},
        {"category": "Software", "amount": 23},
        {"category": "Travel", "amount": 23},
    ]
    areas = identify_target_areas(breakdown, kpis())
    assert [(a["issue"], a["priority"]) for a in areas] == [
        ("High spending in Rent (31.0% of total expenses)", "medium"),
    ]


def test_dominant_category_is_high_priority():
    breakdown = [{"category": "Rent", "amount": 60}, {"category": "Travel", "amount": 40}]
    areas = identify_target_areas(breakdown, kpis())
    assert [(a["issue"], a["priority"]) for a in areas] == [
        ("High spending in Rent (60.0% of total expenses)", "high"),
        ("High spending in Travel (40.0% of total expenses)", "medium"),
    ]


def test_gross_margin_bands():
    medium = identify_target_areas([], kpis(gross_margin=45))
    high = identify_target_areas([], kpis(gross_margin=12.34))
    fine = identify_target_areas([], kpis(gross_margin=50))

    assert medium[0]["priority"] == "medium"
    assert medium[0]["issue"] == "Low gross margin (45.0%)"
    assert high[0]["priority"] == "high"
    assert high[0]["issue"] == "Low gross margin (12.3%)"
    assert fine == []
