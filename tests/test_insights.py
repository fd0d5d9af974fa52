import json

import openai
import pytest

from cashpulse.ai.insights import (
    INSIGHT_SYSTEM_PROMPT,
    REPORT_SYSTEM_PROMPT,
    InsightGenerator,
    build_insight_generator,
    build_insight_prompt,
    build_report_prompt,
    parse_insights,
)
from cashpulse.analytics.metrics import compute_metrics
from cashpulse.analytics.summary import build_financial_summary
from cashpulse.errors import GenerationError

from conftest import FakeOpenAI, insights_body, tx


@pytest.fixture
def summary(sample_transactions):
    return build_financial_summary(compute_metrics(sample_transactions))


def test_insight_prompt_carries_summary_and_sample(summary):
    txs = [tx(f"2024-01-{d:02d}", d, description=f"Item {d}") for d in range(1, 15)]
    prompt = build_insight_prompt(summary, txs, sample_size=10)
    assert "- Total Revenue: $5,000.00" in prompt
    assert "- Average Monthly Revenue: $416.67" in prompt
    assert "- Runway: 12.0 months" in prompt
    assert "2024-01-01: Item 1 - $1.00 (expense)" in prompt
    assert "Item 10 -" in prompt
    assert "Item 11 -" not in prompt
    assert "exactly 3 insights" in prompt


def test_report_prompt_lists_insights(summary):
    prompt = build_report_prompt(summary, [{"title": "Cash", "content": "Healthy"}], "quarterly")
    assert "Report Type: quarterly" in prompt
    assert "- Cash: Healthy" in prompt
    assert "Average Monthly" not in prompt


def test_report_prompt_without_insights(summary):
    assert "(none generated yet)" in build_report_prompt(summary, [])


def test_parse_insights_cleans_items():
    body = json.dumps({"insights": [
        {"title": "Good", "content": "c1", "type": "positive"},
        {"title": "", "content": "dropped"},
        {"title": "Odd", "content": "c2", "type": "critical"},
        {"title": "Loud", "type": "WARNING"},
        "not a dict",
    ]})
    assert parse_insights(body) == [
        {"title": "Good", "content": "c1", "type": "positive"},
        {"title": "Odd", "content": "c2", "type": "info"},
        {"title": "Loud", "content": "", "type": "warning"},
    ]


@pytest.mark.parametrize("body", ["[]", "", '{"insights": null}', '{"insights": 5}', '{"insights": "text"}'])
def test_parse_insights_tolerates_wrong_shape(body):
    assert parse_insights(body) == []


def test_null_insight_list_is_generation_error(summary, sample_transactions):
    gen = InsightGenerator(FakeOpenAI(['{"insights": null}']))
    with pytest.raises(GenerationError, match="no insights"):
        gen.generate_insights(summary, sample_transactions)


def test_empty_choices_is_generation_error(summary, sample_transactions):
    # None makes the fake client answer with an empty choices list
    gen = InsightGenerator(FakeOpenAI([None, None]))
    with pytest.raises(GenerationError, match="Failed to generate AI insights: .*no choices"):
        gen.generate_insights(summary, sample_transactions)
    with pytest.raises(GenerationError, match="Failed to generate financial report: .*no choices"):
        gen.generate_report(summary, [])


def test_generate_insights_calls_json_mode(summary, sample_transactions):
    client = FakeOpenAI([insights_body("A", "B", "C", "D")])
    out = InsightGenerator(client, model="m").generate_insights(summary, sample_transactions)

    assert [i["title"] for i in out] == ["A", "B", "C"]
    (call,) = client.calls
    assert call["model"] == "m"
    assert call["response_format"] == {"type": "json_object"}
    assert call["temperature"] == 0.3
    assert call["messages"][0] == {"role": "system", "content": INSIGHT_SYSTEM_PROMPT}


def test_generate_insights_wraps_client_errors(summary, sample_transactions):
    gen = InsightGenerator(FakeOpenAI(error=openai.OpenAIError("quota exceeded")))
    with pytest.raises(GenerationError, match="Failed to generate AI insights: quota exceeded"):
        gen.generate_insights(summary, sample_transactions)


def test_generate_insights_rejects_bad_json(summary, sample_transactions):
    gen = InsightGenerator(FakeOpenAI(["not json"]))
    with pytest.raises(GenerationError):
        gen.generate_insights(summary, sample_transactions)


def test_generate_insights_rejects_empty_set(summary, sample_transactions):
    gen = InsightGenerator(FakeOpenAI([json.dumps({"insights": []})]))
    with pytest.raises(GenerationError, match="no insights"):
        gen.generate_insights(summary, sample_transactions)


def test_generate_report_returns_body(summary, fake_openai, generator):
    fake_openai.chat.completions.bodies.append("# Report\n\nAll good.")
    assert generator.generate_report(summary, [], "monthly") == "# Report\n\nAll good."
    (call,) = fake_openai.calls
    assert call["messages"][0]["content"] == REPORT_SYSTEM_PROMPT
    assert call["max_tokens"] == 2000
    assert "response_format" not in call


def test_generate_report_wraps_client_errors(summary):
    gen = InsightGenerator(FakeOpenAI(error=openai.OpenAIError("down")))
    with pytest.raises(GenerationError, match="Failed to generate financial report"):
        gen.generate_report(summary, [])


def test_build_insight_generator_requires_key():
    with pytest.raises(GenerationError, match="OPENAI_API_KEY"):
        build_insight_generator("")


def test_build_insight_generator_with_key():
    gen = build_insight_generator("sk-test")
    assert isinstance(gen.client, openai.OpenAI)
