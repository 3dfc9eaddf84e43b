"""HTML helpers shared by the extractors.

Every helper raises `MalformedInputError` on unexpected input instead of
returning a silent default, so a layout change on the site surfaces as a
`Malformed` result rather than a wrong record.
"""

from __future__ import annotations

import dataclasses
import re
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import TypeVar

from bs4 import BeautifulSoup, NavigableString, Tag

from tibiakit.core.errors import MalformedInputError

E = TypeVar("E", bound=Enum)

_WHITESPACE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCTUATION = re.compile(r"\s+([.,;:!?)])")
_DATETIME = re.compile(
    r"(?P<month>[A-Z][a-z]{2})\s+(?P<day>\d{1,2})\s+(?P<year>\d{4}),?\s+"
    r"(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2}))?\s*(?P<tz>CES?T)?"
)
_DATE = re.compile(r"(?P<month>[A-Z][a-z]{2})\s+(?P<day>\d{1,2})\s+(?P<year>\d{4})")
_MONTH_YEAR = re.compile(r"^(?P<month>\d{2})/(?P<year>\d{4})$")
_THOUSAND_SUFFIX = re.compile(r"(?P<number>\d[\d,]*)\s*(?P<suffix>k*)", re.IGNORECASE)
_PAGE_PARAM = re.compile(r"currentpage=(\d+)", re.IGNORECASE)
_RESULTS = re.compile(r"Results:\s*(\d[\d,]*)")

_MONTHS = {
    "Jan": 1, "Feb": 2, "Mar": 3, "Apr": 4, "May": 5, "Jun": 6,
    "Jul": 7, "Aug": 8, "Sep": 9, "Oct": 10, "Nov": 11, "Dec": 12,
}
_TIMEZONES = {
    "CET": timezone(timedelta(hours=1)),
    "CEST": timezone(timedelta(hours=2)),
}


def make_soup(content: str) -> BeautifulSoup:
    return BeautifulSoup(content, "html.parser")


def clean_text(value: Tag | NavigableString | str | None) -> str:
    """Visible text with non-breaking spaces and whitespace runs collapsed."""

    if value is None:
        return ""
    text = value.get_text(" ") if isinstance(value, Tag) else str(value)
    text = _WHITESPACE.sub(" ", text.replace("\xa0", " ")).strip()
    return _SPACE_BEFORE_PUNCTUATION.sub(r"\1", text)


def parse_integer(value: str, default: int | None = None) -> int:
    """Parse numbers such as `1,375`, `230 sqm` or `-5`."""

    digits = re.sub(r"[^\d-]", "", value or "")
    if digits in ("", "-"):
        if default is not None:
            return default
        raise MalformedInputError(f"expected an integer, got {value!r}")
    try:
        return int(digits)
    except ValueError as exc:
        raise MalformedInputError(f"expected an integer, got {value!r}") from exc


def parse_thousand_suffix(value: str) -> int:
    """Parse amounts such as `50k gold` or `1kk`: each `k` multiplies by 1000."""

    match = _THOUSAND_SUFFIX.search(value or "")
    if match is None:
        raise MalformedInputError(f"expected an amount, got {value!r}")
    number = int(match.group("number").replace(",", ""))
    return number * 1000 ** len(match.group("suffix"))


def parse_tibia_datetime(value: str) -> datetime:
    """Parse `Jul 10 2023, 10:05:32 CEST` (seconds optional) into an aware UTC datetime."""

    match = _DATETIME.search(clean_text(value))
    if match is None:
        raise MalformedInputError(f"expected a date and time, got {value!r}")
    month = _MONTHS.get(match.group("month"))
    if month is None:
        raise MalformedInputError(f"unknown month in {value!r}")
    tz = _TIMEZONES.get(match.group("tz") or "CET")
    try:
        local = datetime(
            int(match.group("year")),
            month,
            int(match.group("day")),
            int(match.group("hour")),
            int(match.group("minute")),
            int(match.group("second") or 0),
            tzinfo=tz,
        )
    except ValueError as exc:
        raise MalformedInputError(f"invalid date and time {value!r}") from exc
    return local.astimezone(timezone.utc)


def parse_tibia_date(value: str) -> date:
    """Parse `Aug 29 2017`."""

    match = _DATE.search(clean_text(value))
    if match is None:
        raise MalformedInputError(f"expected a date, got {value!r}")
    month = _MONTHS.get(match.group("month"))
    if month is None:
        raise MalformedInputError(f"unknown month in {value!r}")
    try:
        return date(int(match.group("year")), month, int(match.group("day")))
    except ValueError as exc:
        raise MalformedInputError(f"invalid date {value!r}") from exc


def parse_month_year(value: str) -> str:
    """Parse `04/1997` into `1997-04`."""

    match = _MONTH_YEAR.match(clean_text(value))
    if match is None:
        raise MalformedInputError(f"expected MM/YYYY, got {value!r}")
    return f"{match.group('year')}-{match.group('month')}"


def parse_enum(enum_type: type[E], value: str | int, *, label: str | None = None) -> E:
    try:
        return enum_type(value)
    except ValueError as exc:
        raise MalformedInputError(f"unknown {label or enum_type.__name__}: {value!r}") from exc


def parse_tables_map(root: Tag) -> dict[str, Tag]:
    """Map each table container's caption to its content table."""

    tables: dict[str, Tag] = {}
    for container in root.select("div.TableContainer"):
        caption = container.select_one("div.Text")
        table = container.select_one("table.TableContent")
        if caption is None or table is None:
            continue
        tables.setdefault(clean_text(caption), table)
    return tables


def get_containing(tables: dict[str, Tag], text: str) -> Tag | None:
    """First table whose caption contains `text`."""

    for caption, table in tables.items():
        if text in caption:
            return table
    return None


def rows(table: Tag) -> list[Tag]:
    body = table.find("tbody", recursive=False) or table
    return body.find_all("tr", recursive=False)


def cells(row: Tag) -> list[Tag]:
    return row.find_all("td", recursive=False)


def key_value_rows(table: Tag) -> dict[str, Tag]:
    """Map `Label:` cells to the cell that follows them."""

    values: dict[str, Tag] = {}
    for row in rows(table):
        columns = cells(row)
        if len(columns) < 2:
            continue
        label = clean_text(columns[0]).rstrip(":").strip()
        if label:
            values[label] = columns[1]
    return values


def require_row(values: dict[str, Tag], label: str) -> Tag:
    cell = values.get(label)
    if cell is None:
        raise MalformedInputError(f"missing {label!r} row")
    return cell


@dataclasses.dataclass(frozen=True)
class FormData:
    """Values a browser would submit for a form."""

    values: dict[str, list[str]]

    def get(self, name: str, default: str | None = None) -> str | None:
        found = self.values.get(name)
        return found[0] if found else default

    def get_all(self, name: str) -> list[str]:
        return list(self.values.get(name, []))


def form_data(form: Tag) -> FormData:
    """Collect the submittable values of `form`: checked radios/checkboxes, selected options, inputs."""

    values: dict[str, list[str]] = {}
    for field in form.find_all(["input", "select", "textarea"]):
        name = field.get("name")
        if not name:
            continue
        if field.name == "input":
            input_type = str(field.get("type") or "text").lower()
            if input_type in ("submit", "button", "image", "reset"):
                continue
            if input_type in ("radio", "checkbox") and not field.has_attr("checked"):
                continue
            default = "on" if input_type == "checkbox" else ""
            values.setdefault(name, []).append(str(field.get("value", default)))
        elif field.name == "select":
            options = field.find_all("option")
            selected = [option for option in options if option.has_attr("selected")] or options[:1]
            for option in selected:
                values.setdefault(name, []).append(str(option.get("value", clean_text(option))))
        else:
            values.setdefault(name, []).append(field.get_text())
    return FormData(values=values)


def parse_pagination(block: Tag) -> tuple[int, int, int]:
    """Read `(current_page, total_pages, results_count)` from a page navigation block."""

    current_page = 1
    current = block.select_one(".CurrentPageLink")
    if current is not None:
        current_page = parse_integer(clean_text(current))

    total_pages = current_page
    for link in block.select(".PageLink"):
        text = clean_text(link)
        if text.isdigit():
            total_pages = max(total_pages, int(text))
            continue
        anchor = link.find("a", href=True)
        if anchor is not None:
            match = _PAGE_PARAM.search(str(anchor["href"]))
            if match:
                total_pages = max(total_pages, int(match.group(1)))

    results = _RESULTS.search(clean_text(block))
    if results is None:
        raise MalformedInputError("pagination block has no results count")
    return current_page, total_pages, parse_integer(results.group(1))


def find_pagination_block(root: Tag) -> Tag | None:
    return root.select_one(".PageNavigation, .BlockPageNavigationRow")
