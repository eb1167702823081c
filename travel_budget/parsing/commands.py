"""
Command Parser

Turns a chat message into an intent. Matching is done against an ordered
list of (pattern, builder) pairs and the first hit wins, so ORDER MATTERS:

1. balance <city>             -> CityBalanceQuery
2. budget actual / current budget -> ReportQuery(actual)
3. budget                     -> ReportQuery(planned)
4. balance                    -> GlobalBalanceQuery
5. spent X <currency> on random -> PoolExpense
6. spent X <currency> on <city>, day N -> CityExpense

"balance <city>" must be tried before plain "balance", and the pool
pattern before the city pattern, or the generic rule would swallow the
specific one.

Anything else, or anything from another channel, yields None and the
ledger stays silent.
"""

import math
import re
from typing import Callable, NamedTuple, Optional

from travel_budget.models.commands import (
    CityBalanceQuery,
    CityExpense,
    GlobalBalanceQuery,
    Intent,
    PoolExpense,
    ReportMode,
    ReportQuery,
)


# Verb with or without an accent on the vowel ("spent", "spént", ...)
_VERB = r"sp[eéèêë]nt"
_AMOUNT = r"(?P<amount>\d+(?:\.\d+)?)"
_CURRENCY = r"\w+"
_ON = r"\s*,?\s*on\s*,?\s*"
# At most nine digits; longer runs do not match at all
_DAY = r"(?P<day>\d{1,9})(?!\d)"


class CommandPattern(NamedTuple):
    """One entry of the dispatch table."""
    name: str
    pattern: re.Pattern
    build: Callable[[re.Match], Optional[Intent]]


def _parse_amount(match: re.Match) -> Optional[float]:
    # Huge digit runs overflow to inf
    amount = float(match.group("amount"))
    return amount if math.isfinite(amount) else None


def _build_city_balance(match: re.Match) -> Optional[Intent]:
    city = match.group("city").strip()
    # "balance balance" is not a city
    if not city or city.casefold() == "balance":
        return None
    return CityBalanceQuery(city=city)


def _build_pool_expense(match: re.Match) -> Optional[Intent]:
    amount = _parse_amount(match)
    if amount is None:
        return None
    return PoolExpense(amount=amount)


def _build_city_expense(match: re.Match) -> Optional[Intent]:
    city = match.group("city").strip()
    amount = _parse_amount(match)
    if not city or amount is None:
        return None
    return CityExpense(
        amount=amount,
        city=city,
        day=int(match.group("day")),
    )


COMMAND_PATTERNS: list[CommandPattern] = [
    CommandPattern(
        "city_balance",
        re.compile(r"^balance\s+(?P<city>[\w\s]+)$", re.IGNORECASE),
        _build_city_balance,
    ),
    CommandPattern(
        "actual_report",
        re.compile(r"^(?:budget\s+actual|current\s+budget)$", re.IGNORECASE),
        lambda match: ReportQuery(mode=ReportMode.ACTUAL),
    ),
    CommandPattern(
        "planned_report",
        re.compile(r"^budget$", re.IGNORECASE),
        lambda match: ReportQuery(mode=ReportMode.PLANNED),
    ),
    CommandPattern(
        "global_balance",
        re.compile(r"^balance$", re.IGNORECASE),
        lambda match: GlobalBalanceQuery(),
    ),
    CommandPattern(
        "pool_expense",
        re.compile(
            rf"^{_VERB}\s+{_AMOUNT}\s+{_CURRENCY}{_ON}random\s*$",
            re.IGNORECASE,
        ),
        _build_pool_expense,
    ),
    CommandPattern(
        "city_expense",
        re.compile(
            rf"^{_VERB}\s+{_AMOUNT}\s+{_CURRENCY}{_ON}"
            r"(?P<city>[\w\s]+?)\s*,\s*day\s*"
            rf"{_DAY}",
            re.IGNORECASE,
        ),
        _build_city_expense,
    ),
]


class CommandParser:
    """
    Classifies messages from the one authorized channel.

    Authorization is exact string equality on the channel name.
    """

    def __init__(
        self,
        authorized_channel: str,
        patterns: Optional[list[CommandPattern]] = None,
    ):
        self._authorized_channel = authorized_channel
        self._patterns = patterns if patterns is not None else COMMAND_PATTERNS

    def is_authorized(self, channel_id: str) -> bool:
        return channel_id == self._authorized_channel

    def parse(self, raw_text: str, channel_id: str) -> Optional[Intent]:
        """Return the intent of a message, or None to stay silent."""
        if not self.is_authorized(channel_id):
            return None
        return self.classify(raw_text)

    def classify(self, raw_text: str) -> Optional[Intent]:
        """Match text against the dispatch table, ignoring the channel."""
        text = (raw_text or "").strip()
        if not text:
            return None

        for command in self._patterns:
            match = command.pattern.match(text)
            if match is None:
                continue
            intent = command.build(match)
            if intent is not None:
                return intent

        return None
