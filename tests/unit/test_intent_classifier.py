"""
Unit tests for intent classification and rule precedence.
"""
import pytest

from dashboard_assistant.services.intent_classifier import (
    RULES, IntentClassifier, IntentKind, detect_chart_type,
)


@pytest.fixture
def classifier(catalogue):
    return IntentClassifier(catalogue)


def test_rule_order(classifier):
    assert classifier.rule_names == [
        "chart_type", "live", "history", "time_window",
        "show_all", "pressure_group", "parameters", "bare_chart_type",
    ]


@pytest.mark.parametrize("query,kind,rule", [
    ("change the graph to area", IntentKind.CHART_TYPE, "chart_type"),
    ("spline", IntentKind.BARE_CHART_TYPE, "bare_chart_type"),
    ("go live", IntentKind.LIVE_MODE, "live"),
    ("real-time 24 hrs", IntentKind.LIVE_WINDOW, "live"),
    ("live history", IntentKind.HISTORY_MODE, "history"),
    ("switch to history mode", IntentKind.HISTORY_MODE, "history"),
    ("show last 12 hours", IntentKind.HISTORY_MODE, "history"),
    ("pressure only, temporarily", IntentKind.SHOW_GROUP, "pressure_group"),
    ("monthly", IntentKind.HISTORY_RANGE, "history"),
    ("24 hours", IntentKind.TIME_WINDOW, "time_window"),
    ("show everything", IntentKind.SHOW_ALL, "show_all"),
    ("only pressure", IntentKind.SHOW_GROUP, "pressure_group"),
    ("tbg only", IntentKind.SHOW_ONLY, "parameters"),
    ("disable flt", IntentKind.HIDE_PARAMS, "parameters"),
    ("tubing", IntentKind.SHOW_PARAMS, "parameters"),
    ("what is the weather", IntentKind.UNCLEAR, "unclear"),
])
def test_classify(classifier, query, kind, rule):
    intent = classifier.classify(query)
    assert intent.kind is kind
    assert intent.rule == rule


def test_live_window_captures_hour_count(classifier):
    assert classifier.classify("live 12h").live_key == "12h"
    assert classifier.classify("now, last 24").live_key == "24h"


@pytest.mark.parametrize("query,hist_key", [
    ("yesterday", "yesterday"),
    ("past 1 month", "1month"),
    ("1 month history", "1month"),
    ("past 7 days", "1week"),
    ("weekly", "1week"),
])
def test_history_range_keys(classifier, query, hist_key):
    intent = classifier.classify(query)
    assert intent.kind is IntentKind.HISTORY_RANGE
    assert intent.hist_key == hist_key


def test_history_word_suppresses_live(classifier):
    assert classifier.classify("live history for 1 week").hist_key == "1week"


def test_show_all_needs_no_hide_word(classifier):
    assert classifier.classify("remove all").kind is IntentKind.UNCLEAR


def test_group_intent_lists_group_members(classifier):
    intent = classifier.classify("pressure sensors")
    assert intent.group == "pressure"
    assert intent.params == ("tubing", "a_ann", "b_ann", "flowline_p")


def test_precedence_follows_rule_table(catalogue):
    # Without the chart rule, a chart query falls through to the bare chart rule
    classifier = IntentClassifier(catalogue, rules=RULES[1:])
    assert classifier.classify("use spline chart").kind is IntentKind.BARE_CHART_TYPE


def test_context_holds_resolved_parameters(classifier):
    ctx = classifier.context("  Hide TBG and FLT  ")
    assert ctx.text == "hide tbg and flt"
    assert ctx.params == ("tubing", "flowline_t")
    assert ctx.chart_type is None


@pytest.mark.parametrize("text,expected", [
    ("bar chart", "column"),
    ("column", "column"),
    ("use a line", "line"),
    ("barrel", None),
    ("spline", "spline"),
])
def test_detect_chart_type(text, expected):
    assert detect_chart_type(text) == expected
