"""
Typed view of the financials-reported payload.

Payload shape:
  {"cik": "...", "symbol": "...", "data": [
      {"acceptedDate": ..., "accessNumber": ..., "form": "10-Q", "quarter": 1, "year": 2023,
       "report": {"bs": [...], "cf": [...], "ic": [...]}, ...}
  ]}

Each statement list holds {"concept", "label", "unit", "value"} rows.
"""

from __future__ import annotations

import json
from typing import List, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, ValidationError


STATEMENTS = ["bs", "cf", "ic"]

LINE_ITEM_COLUMNS = [
    "symbol", "cik", "year", "quarter", "form", "access_number", "filed_date",
    "statement", "concept", "label", "unit", "value",
]


class ReportDecodeError(ValueError):
    pass


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class LineItem(_Frozen):
    concept: str
    label: str = ""
    unit: str = ""
    value: int


class FinancialReport(_Frozen):
    """Balance sheet, cash flow and income statement rows. Missing lists decode as empty."""
    bs: List[LineItem] = Field(default_factory=list)
    cf: List[LineItem] = Field(default_factory=list)
    ic: List[LineItem] = Field(default_factory=list)


class Filing(_Frozen):
    accepted_date: str = Field("", alias="acceptedDate")
    access_number: str = Field("", alias="accessNumber")
    cik: str = ""
    symbol: str = ""
    form: str = ""
    filed_date: str = Field("", alias="filedDate")
    start_date: str = Field("", alias="startDate")
    end_date: str = Field("", alias="endDate")
    quarter: int = 0
    year: int
    report: FinancialReport = Field(default_factory=FinancialReport)

    @property
    def is_annual(self) -> bool:
        return self.quarter == 0


class Report(_Frozen):
    cik: str = ""
    symbol: str = ""
    data: List[Filing] = Field(default_factory=list)


def parse_report(body: Union[str, bytes]) -> Report:
    try:
        payload = json.loads(body)
    except ValueError as e:
        raise ReportDecodeError(f"Response body is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise ReportDecodeError(f"Expected a JSON object, got {type(payload).__name__}")

    try:
        return Report.model_validate(payload)
    except ValidationError as e:
        raise ReportDecodeError(f"Response body does not match the report schema: {e}") from e


def line_items_frame(report: Report) -> pd.DataFrame:
    """One row per reported figure across every filing and statement."""
    rows = []
    for filing in report.data:
        for statement in STATEMENTS:
            for item in getattr(filing.report, statement):
                rows.append({
                    "symbol": filing.symbol or report.symbol,
                    "cik": filing.cik or report.cik,
                    "year": filing.year,
                    "quarter": filing.quarter,
                    "form": filing.form,
                    "access_number": filing.access_number,
                    "filed_date": filing.filed_date,
                    "statement": statement,
                    "concept": item.concept,
                    "label": item.label,
                    "unit": item.unit,
                    "value": item.value,
                })

    df = pd.DataFrame(rows, columns=LINE_ITEM_COLUMNS)
    if df.empty:
        return df

    df["value"] = df["value"].astype("int64")
    return df
