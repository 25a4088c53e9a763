from __future__ import annotations

import math


def format_money(amount: float, symbol: str = "$", precision: int = 2) -> str:
    """
    Accounting-style money string: symbol, comma thousands, fixed decimals.

    format_money(1234.5)  -> "$1,234.50"
    format_money(-50)     -> "-$50.00"
    """
    amount = float(amount)
    if not math.isfinite(amount):
        raise ValueError(f"Cannot format non-finite amount: {amount}")

    digits = f"{abs(amount):,.{precision}f}"

    # -0.001 rounds to 0.00 and should not print as "-$0.00"
    if amount < 0 and any(ch not in "0.," for ch in digits):
        return f"-{symbol}{digits}"
    return f"{symbol}{digits}"


def parse_money(text: str, symbol: str = "$") -> float:
    s = text.strip()
    negative = s.startswith("-")
    if negative:
        s = s[1:]
    if symbol and s.startswith(symbol):
        s = s[len(symbol):]

    try:
        value = float(s.replace(",", ""))
    except ValueError:
        raise ValueError(f"Not a money string: {text!r}")
    return -value if negative else value
