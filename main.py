"""
Pull Finnhub "financials as reported" for one symbol and dump the response.

Run from project root:
  python main.py --symbol INTC --from 2022-01-01

Env:
  FINNHUB_API_KEY=...

Stdout gets the status line, response headers, a blank line, then the raw body.
Logs go to stderr.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from finnhub_financials.finnhub_client import (
    FinnhubError,
    describe_response,
    fetch,
    get_api_key,
    get_base_url,
    get_timeout,
)
from finnhub_financials.reports import ReportDecodeError, line_items_frame, parse_report


log = logging.getLogger("finnhub_financials")


def summarize(body: str) -> None:
    report = parse_report(body)
    items = line_items_frame(report)

    annual = sum(1 for f in report.data if f.is_annual)
    log.info(
        f"Decoded {report.symbol or '?'} (cik={report.cik or '?'}): "
        f"{len(report.data)} filings ({annual} annual) | line items: {len(items)}"
    )
    if not items.empty:
        per_statement = items.groupby("statement").size().to_dict()
        log.info(f"Line items by statement: {per_statement}")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Fetch Finnhub financials-as-reported for one symbol")
    parser.add_argument("--symbol", default="INTC", help="Ticker to pull (default: INTC)")
    parser.add_argument("--from", dest="from_date", default="2022-01-01", help="Earliest filing date, YYYY-MM-DD")
    parser.add_argument("--parse", action="store_true", help="Also decode the body and log a summary")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: INFO)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s | %(levelname)s | %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        response, body = fetch(
            args.symbol,
            args.from_date,
            get_api_key(),
            base_url=get_base_url(),
            timeout=get_timeout(),
        )
    except FinnhubError as e:
        log.error(f"{type(e).__name__}: {e}")
        return 1

    print(describe_response(response))
    print()
    print(body)

    if args.parse:
        try:
            summarize(body)
        except ReportDecodeError as e:
            log.error(f"{type(e).__name__}: {e}")
            return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
