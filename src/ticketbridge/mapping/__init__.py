"""Payload Mapper - Turns board items into tracker ticket payloads."""

from ticketbridge.mapping.exceptions import MappingError
from ticketbridge.mapping.mapper import PayloadMapper
from ticketbridge.mapping.models import TicketDraft, TicketPayload, UpdateBody, to_adf
from ticketbridge.mapping.project_key import extract_project_key
from ticketbridge.mapping.text import (
    IMPERSONAL_RULES,
    make_impersonal,
    parse_update_body,
    select_earliest_update,
    strip_markup,
    strip_qa_marker,
)

__all__ = [
    "IMPERSONAL_RULES",
    "MappingError",
    "PayloadMapper",
    "TicketDraft",
    "TicketPayload",
    "UpdateBody",
    "extract_project_key",
    "make_impersonal",
    "parse_update_body",
    "select_earliest_update",
    "strip_markup",
    "strip_qa_marker",
    "to_adf",
]
