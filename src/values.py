from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional

# SWIFT amounts use the comma as decimal mark ("6400," / "1000,50"); a period is read the same way
_AMOUNT_RE = re.compile(r"^(\d+)(?:[,.](\d*))?$")
_CHARGE_RE = re.compile(r"^(?:[A-Z]{3})?(.+)$", re.DOTALL)
_DATE_RE = re.compile(r"^\d{6}$")
TWO_DIGIT_YEAR_MAX = 2049


def parse_amount(raw: Optional[str]) -> Optional[Decimal]:
    if raw is None:
        return None
    m = _AMOUNT_RE.match(raw.strip())
    if not m:
        return None
    whole, fraction = m.group(1), m.group(2) or ""
    try:
        return Decimal(f"{whole}.{fraction}" if fraction else whole)
    except InvalidOperation:
        return None


def parse_charge(raw: Optional[str]) -> Optional[Decimal]:
    """71F charge line: the amount, optionally preceded by its currency code."""
    if raw is None:
        return None
    m = _CHARGE_RE.match(raw.strip())
    return parse_amount(m.group(1)) if m else None


def parse_yymmdd(raw: Optional[str]) -> Optional[date]:
    if not raw or not _DATE_RE.match(raw):
        return None
    yy, mm, dd = int(raw[0:2]), int(raw[2:4]), int(raw[4:6])
    # two-digit years up to 49 are 20xx, the rest 19xx
    year = 2000 + yy if yy <= TWO_DIGIT_YEAR_MAX % 100 else 1900 + yy
    try:
        return date(year, mm, dd)
    except ValueError:
        return None


@dataclass(frozen=True)
class CurrencyAmount:
    value_date: Optional[date] = None
    currency: str = ""
    amount: Optional[Decimal] = None

    @classmethod
    def parse(cls, raw: str) -> "CurrencyAmount":
        """
        Decode a date + currency + amount token such as ``250709USD6400,``.

        Each part degrades on its own: a bad date leaves ``value_date`` unset,
        a short token leaves ``currency`` empty and a non-numeric tail leaves
        ``amount`` unset. Only an empty token is rejected.
        """
        if raw is None or not raw.strip():
            raise ValueError("currency amount must not be empty")
        raw = raw.strip()

        value_date = parse_yymmdd(raw[:6]) if len(raw) >= 6 else None
        currency = ""
        amount = None
        if len(raw) >= 9:
            currency = raw[6:9]
            amount = parse_amount(raw[9:])
        return cls(value_date=value_date, currency=currency, amount=amount)


@dataclass(frozen=True)
class PartyInfo:
    account: Optional[str] = None
    name: Optional[str] = None

    @classmethod
    def parse(cls, raw: str) -> "PartyInfo":
        """
        Decode an optional ``/account`` token followed by the party name.

        The account runs from the leading slash to the first space or line
        break. Only the first remaining non-blank line is kept as the name.
        """
        if raw is None or not raw.strip():
            raise ValueError("party info must not be empty")
        text = raw.strip()

        account = None
        if text.startswith("/"):
            m = re.search(r"\s", text)
            if m:
                account = text[1:m.start()] or None
                text = text[m.end():]

        lines = [line.strip() for line in text.splitlines() if line.strip()]
        name = lines[0] if lines else None
        return cls(account=account, name=name)
