"""
Rule-based intent classification for dashboard commands.

This module provides:
1. The intent record produced for a query
2. The ordered rule table that decides which intent a query expresses
3. The classifier that runs the table, first match wins

Rules are tried strictly in table order and the first one that commits to an
intent ends classification. There is no scoring: the order of ``RULES`` is the
precedence, which keeps every answer explainable by the name of a single rule.
"""
import re
from enum import Enum
from typing import Callable, List, NamedTuple, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from dashboard_assistant.schemas.actions import ChartType, HistKey, LiveKey, Mode
from dashboard_assistant.services.alias_resolver import AliasResolver
from dashboard_assistant.services.catalogue import Catalogue

PRESSURE_GROUP = "pressure"


class IntentKind(str, Enum):
    CHART_TYPE = "chart_type"
    LIVE_WINDOW = "live_window"
    LIVE_MODE = "live_mode"
    HISTORY_RANGE = "history_range"
    HISTORY_MODE = "history_mode"
    TIME_WINDOW = "time_window"
    SHOW_ALL = "show_all"
    SHOW_GROUP = "show_group"
    SHOW_ONLY = "show_only"
    HIDE_PARAMS = "hide_params"
    SHOW_PARAMS = "show_params"
    BARE_CHART_TYPE = "bare_chart_type"
    UNCLEAR = "unclear"


class Intent(BaseModel):
    """A classified query plus the values captured for it."""
    model_config = ConfigDict(frozen=True)

    kind: IntentKind
    rule: str
    chart_type: Optional[ChartType] = None
    mode: Optional[Mode] = None
    live_key: Optional[LiveKey] = None
    hist_key: Optional[HistKey] = None
    params: Tuple[str, ...] = ()
    group: Optional[str] = None


class QueryContext(NamedTuple):
    """Everything the rules may look at for one query."""
    text: str
    params: Tuple[str, ...]
    chart_type: Optional[ChartType]
    catalogue: Catalogue


# Chart type
CHART_TYPE_PATTERN = re.compile(r"\b(spline|area|column|bar|line)\b")
CHART_VERB_PATTERN = re.compile(r"switch|change|use|set|convert|make")
CHART_NOUN_PATTERN = re.compile(r"chart|graph|plot|type|view")

# Live mode
LIVE_PATTERN = re.compile(r"\b(live|real.?time|realtime|real time|now)\b")
HOUR_COUNT_PATTERN = re.compile(r"\b(1|12|24)\s*(h|hr|hrs|hour|hours)\b")
LAST_HOURS_PATTERN = re.compile(r"\blast\s+(1|12|24)\b")

# History
HISTORY_PATTERN = re.compile(
    r"\b(histor\w*|yesterday|weeks?|weekly|months?|monthly|past)\b"
    r"|\blast\s+\d"
)
YESTERDAY_PATTERN = re.compile(r"yesterday")
ONE_MONTH_PATTERN = re.compile(r"1[\s-]*month|30[\s-]*day|monthly")
ONE_WEEK_PATTERN = re.compile(r"1[\s-]*week|7[\s-]*day|weekly")

# Bare time windows, most specific first
TIME_WINDOW_PATTERNS: Tuple[Tuple[LiveKey, "re.Pattern"], ...] = (
    ("24h", re.compile(r"\b24\s*h(our)?s?\b")),
    ("12h", re.compile(r"\b12\s*h(our)?s?\b")),
    ("1h", re.compile(r"\b1\s*h(our)?s?\b")),
)

# Visibility
SHOW_ALL_PATTERN = re.compile(r"\b(all|every(thing)?|show all|reset)\b")
SHOW_ALL_BLOCKER = re.compile(r"hide|remove")
PRESSURE_ONLY_PATTERN = re.compile(
    r"pressure.*(only|sensor|param)|only.*(pressure|press)|pressure\s+sensor"
)
HIDE_PATTERN = re.compile(r"\b(hide|remove|turn off|disable|off)\b")
SHOW_PATTERN = re.compile(r"\b(show|display|enable|turn on|on)\b")


def _match_chart_type(ctx: QueryContext) -> Optional[Intent]:
    if ctx.chart_type is None:
        return None
    if CHART_VERB_PATTERN.search(ctx.text) or CHART_NOUN_PATTERN.search(ctx.text):
        return Intent(kind=IntentKind.CHART_TYPE, rule="chart_type", chart_type=ctx.chart_type)
    return None


def _match_live(ctx: QueryContext) -> Optional[Intent]:
    if not LIVE_PATTERN.search(ctx.text) or "history" in ctx.text:
        return None
    hours = HOUR_COUNT_PATTERN.search(ctx.text)
    last = LAST_HOURS_PATTERN.search(ctx.text)
    if hours or last:
        count = hours.group(1) if hours else last.group(1)
        return Intent(kind=IntentKind.LIVE_WINDOW, rule="live", live_key=f"{count}h")
    return Intent(kind=IntentKind.LIVE_MODE, rule="live", mode="realtime")


def _match_history(ctx: QueryContext) -> Optional[Intent]:
    if not HISTORY_PATTERN.search(ctx.text):
        return None
    if YESTERDAY_PATTERN.search(ctx.text):
        hist_key = "yesterday"
    elif ONE_MONTH_PATTERN.search(ctx.text):
        hist_key = "1month"
    elif ONE_WEEK_PATTERN.search(ctx.text):
        hist_key = "1week"
    else:
        return Intent(kind=IntentKind.HISTORY_MODE, rule="history", mode="history")
    return Intent(kind=IntentKind.HISTORY_RANGE, rule="history", hist_key=hist_key)


def _match_time_window(ctx: QueryContext) -> Optional[Intent]:
    for live_key, pattern in TIME_WINDOW_PATTERNS:
        if pattern.search(ctx.text):
            return Intent(kind=IntentKind.TIME_WINDOW, rule="time_window", live_key=live_key)
    return None


def _match_show_all(ctx: QueryContext) -> Optional[Intent]:
    if SHOW_ALL_PATTERN.search(ctx.text) and not SHOW_ALL_BLOCKER.search(ctx.text):
        return Intent(kind=IntentKind.SHOW_ALL, rule="show_all")
    return None


def _match_pressure_group(ctx: QueryContext) -> Optional[Intent]:
    if PRESSURE_ONLY_PATTERN.search(ctx.text) or ctx.text in ("pressure", "pressures"):
        return Intent(
            kind=IntentKind.SHOW_GROUP,
            rule="pressure_group",
            params=ctx.catalogue.group(PRESSURE_GROUP),
            group=PRESSURE_GROUP,
        )
    return None


def _match_parameters(ctx: QueryContext) -> Optional[Intent]:
    if not ctx.params:
        return None
    is_hide = bool(HIDE_PATTERN.search(ctx.text))
    is_show = bool(SHOW_PATTERN.search(ctx.text))
    # Hide only wins when no show word is present
    if is_hide and not is_show:
        return Intent(kind=IntentKind.HIDE_PARAMS, rule="parameters", params=ctx.params)
    if "only" in ctx.text:
        return Intent(kind=IntentKind.SHOW_ONLY, rule="parameters", params=ctx.params)
    return Intent(kind=IntentKind.SHOW_PARAMS, rule="parameters", params=ctx.params)


def _match_bare_chart_type(ctx: QueryContext) -> Optional[Intent]:
    if ctx.chart_type is None:
        return None
    return Intent(kind=IntentKind.BARE_CHART_TYPE, rule="bare_chart_type", chart_type=ctx.chart_type)


class IntentRule(NamedTuple):
    name: str
    match: Callable[[QueryContext], Optional[Intent]]


RULES: Tuple[IntentRule, ...] = (
    IntentRule("chart_type", _match_chart_type),
    IntentRule("live", _match_live),
    IntentRule("history", _match_history),
    IntentRule("time_window", _match_time_window),
    IntentRule("show_all", _match_show_all),
    IntentRule("pressure_group", _match_pressure_group),
    IntentRule("parameters", _match_parameters),
    IntentRule("bare_chart_type", _match_bare_chart_type),
)

UNCLEAR_INTENT = Intent(kind=IntentKind.UNCLEAR, rule="unclear")


def detect_chart_type(text: str) -> Optional[ChartType]:
    match = CHART_TYPE_PATTERN.search(text)
    if not match:
        return None
    return "column" if match.group(1) == "bar" else match.group(1)


class IntentClassifier:
    """Runs the rule table against a query and returns the first intent found."""

    def __init__(self, catalogue: Catalogue, resolver: AliasResolver = None,
                 rules: Tuple[IntentRule, ...] = RULES):
        self.catalogue = catalogue
        self.resolver = resolver or AliasResolver(catalogue)
        self.rules = rules

    @property
    def rule_names(self) -> List[str]:
        return [rule.name for rule in self.rules]

    def context(self, query: str) -> QueryContext:
        text = query.lower().strip()
        return QueryContext(
            text=text,
            params=tuple(self.resolver.resolve(text)),
            chart_type=detect_chart_type(text),
            catalogue=self.catalogue,
        )

    def classify(self, query: str) -> Intent:
        ctx = self.context(query)
        for rule in self.rules:
            intent = rule.match(ctx)
            if intent is not None:
                return intent
        return UNCLEAR_INTENT
