"""
Finnhub "financials as reported" client.

Calls:
  https://finnhub.io/api/v1/stock/financials-reported?symbol=INTC&from=2022-01-01
with the token in the x-finnhub-token header.

Env:
  FINNHUB_API_KEY=...

Optional env:
  FINNHUB_BASE_URL=https://finnhub.io/api/v1
  FINNHUB_TIMEOUT_SECONDS=30      # 0 disables the timeout
"""

from __future__ import annotations

import os
import logging
from datetime import date, datetime
from typing import Optional, Tuple, Union

import requests
from dotenv import load_dotenv


DEFAULT_BASE_URL = "https://finnhub.io/api/v1"
FINANCIALS_REPORTED_ENDPOINT = "/stock/financials-reported"
TOKEN_HEADER = "x-finnhub-token"
DEFAULT_TIMEOUT_SECONDS = 30.0

log = logging.getLogger(__name__)


# ----------------------------
# Errors
# ----------------------------
class FinnhubError(Exception):
    pass


class MissingCredentialsError(FinnhubError, RuntimeError):
    pass


class RequestConstructionError(FinnhubError, ValueError):
    pass


class NetworkError(FinnhubError):
    pass


class BodyReadError(FinnhubError, IOError):
    pass


# ----------------------------
# Config
# ----------------------------
def get_api_key() -> str:
    load_dotenv()

    api_key = (os.getenv("FINNHUB_API_KEY") or "").strip()
    if not api_key:
        raise MissingCredentialsError("Missing FINNHUB_API_KEY in your environment/.env")
    return api_key


def get_base_url() -> str:
    load_dotenv()
    return (os.getenv("FINNHUB_BASE_URL") or DEFAULT_BASE_URL).strip().rstrip("/")


def get_timeout() -> Optional[float]:
    load_dotenv()

    raw = os.getenv("FINNHUB_TIMEOUT_SECONDS", "").strip()
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        seconds = float(raw)
    except ValueError:
        raise FinnhubError(f"FINNHUB_TIMEOUT_SECONDS must be a number, got {raw!r}")
    return seconds if seconds > 0 else None


# ----------------------------
# Request
# ----------------------------
def clean_symbol(x: object) -> str:
    return str(x).strip().upper()


def format_from_date(value: Union[date, str]) -> str:
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            return datetime.strptime(value.strip(), "%Y-%m-%d").date().isoformat()
        except ValueError:
            pass
    raise RequestConstructionError(f"from date must be YYYY-MM-DD, got {value!r}")


def build_request(
    symbol: str,
    from_date: Union[date, str],
    api_key: str,
    base_url: Optional[str] = None,
) -> requests.PreparedRequest:
    """
    Build the GET request for one symbol. Only the symbol/from query params and
    the token header are set, nothing else.
    """
    symbol = clean_symbol(symbol or "")
    if not symbol:
        raise RequestConstructionError("symbol must not be empty")
    if not api_key or not api_key.strip():
        raise RequestConstructionError("api key must not be empty")

    url = f"{(base_url or DEFAULT_BASE_URL).rstrip('/')}{FINANCIALS_REPORTED_ENDPOINT}"
    params = {
        "symbol": symbol,
        "from": format_from_date(from_date),
    }
    headers = {TOKEN_HEADER: api_key.strip()}

    try:
        return requests.Request("GET", url, params=params, headers=headers).prepare()
    except (requests.exceptions.RequestException, ValueError) as e:
        raise RequestConstructionError(f"Could not build request for {url}: {e}") from e


# ----------------------------
# Fetch
# ----------------------------
def fetch(
    symbol: str,
    from_date: Union[date, str],
    api_key: str,
    session: Optional[requests.Session] = None,
    base_url: Optional[str] = None,
    timeout: Optional[float] = DEFAULT_TIMEOUT_SECONDS,
) -> Tuple[requests.Response, str]:
    """
    Send the request and read the whole body into memory.

    Returns (response, body_text). The response is closed before returning,
    whether or not the body could be read.
    """
    req = build_request(symbol, from_date, api_key, base_url=base_url)
    log.debug(f"GET {req.url}")

    if session is None:
        with requests.Session() as own_session:
            return _send_and_read(own_session, req, timeout)
    return _send_and_read(session, req, timeout)


def _send_and_read(
    session: requests.Session,
    req: requests.PreparedRequest,
    timeout: Optional[float],
) -> Tuple[requests.Response, str]:
    # env CA bundle / proxies, the same settings requests.get() would pick up
    settings = session.merge_environment_settings(req.url, {}, None, None, None)
    try:
        r = session.send(req, stream=True, timeout=timeout, **settings)
    except requests.exceptions.RequestException as e:
        raise NetworkError(f"Request to {req.url} failed: {e}") from e

    with r:
        try:
            body = r.content
        except (requests.exceptions.RequestException, OSError) as e:
            raise BodyReadError(f"Failed reading response body from {req.url}: {e}") from e

    log.info(f"{r.status_code} {r.reason} | {len(body or b'')} bytes")
    return r, r.text


def describe_response(r: requests.Response) -> str:
    lines = [f"Status: {r.status_code} {r.reason or ''}".rstrip()]
    for name, value in r.headers.items():
        lines.append(f"{name}: {value}")
    return "\n".join(lines)
