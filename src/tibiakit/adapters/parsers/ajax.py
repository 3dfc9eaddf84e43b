"""Auction pagination endpoint.

The endpoint answers with JSON whose first object carries an HTML fragment
with the icons of the requested page.
"""

from __future__ import annotations

from typing import Callable, Sequence

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from tibiakit.adapters.parsers.auction import ENTRY_PARSERS
from tibiakit.adapters.parsers.html import make_soup
from tibiakit.core.domain.enums import AuctionPagesType
from tibiakit.core.domain.results import ExtractionResult, extractor
from tibiakit.core.errors import MalformedInputError


class AjaxObject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: str = Field(..., validation_alias=AliasChoices("Data", "data"))


class AjaxResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ajax_objects: list[AjaxObject] = Field(..., validation_alias=AliasChoices("AjaxObjects", "ajaxObjects"))


def parse_ajax_fragment(content: str) -> str:
    """HTML fragment of the first object of a pagination response."""

    try:
        response = AjaxResponse.model_validate_json(content)
    except ValidationError as exc:
        raise MalformedInputError(f"invalid pagination response: {exc.error_count()} error(s)") from exc
    if not response.ajax_objects:
        raise MalformedInputError("pagination response without objects")
    return response.ajax_objects[0].data


def _page_extractor(kind: AuctionPagesType) -> Callable[[str], ExtractionResult[Sequence]]:
    entry_parser = ENTRY_PARSERS[kind]

    @extractor
    def extract(content: str) -> list:
        return entry_parser(make_soup(parse_ajax_fragment(content)))

    extract.__name__ = f"extract_{kind.name.lower()}_page"
    return extract


PAGE_EXTRACTORS: dict[AuctionPagesType, Callable[[str], ExtractionResult[Sequence]]] = {
    kind: _page_extractor(kind) for kind in AuctionPagesType
}
