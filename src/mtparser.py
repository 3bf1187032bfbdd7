from __future__ import annotations
import logging
import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from models import ApplicationHeader, BasicHeader, Message, TextBody, Trailer, UserHeader
from values import CurrencyAmount, PartyInfo, parse_charge

BLOCK_OPEN_PATTERN = re.compile(r"\{(\d):")
TAG_PATTERN = re.compile(r":(\d{2}[A-Z]?):(.*?)(?=:\d{2}[A-Z]?:|\Z)", re.DOTALL)
SUBBLOCK_PATTERN = re.compile(r"\{([A-Za-z0-9]+):(.*?)\}", re.DOTALL)
TEXT_END_PATTERN = re.compile(r"(?:\A|\r?\n)-\s*\Z")


def _text(value: str) -> str:
    return value


USER_HEADER_FIELDS: Mapping[str, Tuple[str, Callable[[str], Any]]] = {
    "108": ("mir", _text),
    "111": ("service_type", _text),
    "121": ("unique_end_to_end_reference", _text),
}

TEXT_BODY_FIELDS: Mapping[str, Tuple[str, Callable[[str], Any]]] = {
    "20": ("transaction_reference", _text),
    "23B": ("bank_operation_code", _text),
    "32A": ("value_date_currency_amount", CurrencyAmount.parse),
    "33B": ("instructed_currency_amount", CurrencyAmount.parse),
    "50K": ("ordering_customer", PartyInfo.parse),
    "52A": ("ordering_institution", _text),
    "59": ("beneficiary", PartyInfo.parse),
    "70": ("details_of_payment", _text),
    "71A": ("details_of_charges", _text),
    "71F": ("charges", parse_charge),
    "72": ("sender_to_receiver_information", _text),
}

TRAILER_FIELDS: Mapping[str, Tuple[str, Callable[[str], Any]]] = {
    "MAC": ("message_authentication_code", _text),
    "CHK": ("checksum", _text),
}

# tags whose every occurrence is kept, in order, instead of the last one
ACCUMULATING_TAGS = frozenset({"71F"})


def extract_blocks(swift_message: str) -> Dict[str, str]:
    """
    Split a message into ``{block id: content}``.

    Content runs from the ``{N:`` opener to its matching close brace, so the
    ``{tag:value}`` sub-blocks of the user header and trailer stay intact.
    A repeated block id keeps the last occurrence. When the braces inside a
    block do not balance, the block is cut at the first close brace after its
    opener; an opener with no close brace at all yields nothing.
    """
    blocks: Dict[str, str] = {}
    pos = 0
    while True:
        m = BLOCK_OPEN_PATTERN.search(swift_message, pos)
        if not m:
            break
        depth = 1
        end = None
        for i in range(m.end(), len(swift_message)):
            ch = swift_message[i]
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    end = i
                    break
        if end is None:
            # unbalanced: cut at the first close brace, as a non-greedy match would
            first_close = swift_message.find("}", m.end())
            if first_close < 0:
                logging.debug("block %s at offset %d is never closed", m.group(1), m.start())
                pos = m.end()
                continue
            logging.debug("block %s at offset %d has unbalanced braces", m.group(1), m.start())
            end = first_close
        blocks[m.group(1)] = swift_message[m.end():end]
        pos = end + 1
    return blocks


def scan_tags(content: str, pattern: re.Pattern = TAG_PATTERN) -> List[Tuple[str, str]]:
    return [(m.group(1), m.group(2).strip()) for m in pattern.finditer(content or "")]


def extract_tags(content: str, pattern: re.Pattern = TAG_PATTERN) -> Dict[str, str]:
    tags: Dict[str, str] = {}
    for tag, value in scan_tags(content, pattern):
        tags[tag] = value
    return tags


def decode_basic_header(content: str) -> Optional[BasicHeader]:
    if len(content) < 3:
        return None
    n = len(content)
    return BasicHeader(
        application_id=content[0:1],
        service_id=content[1:3],
        logical_terminal_address=content[3:15] if n > 12 else "",
        session_number=content[15:19] if n > 17 else "",
        sequence_number=content[19:25] if n > 23 else "",
    )


def decode_application_header(content: str) -> Optional[ApplicationHeader]:
    if len(content) < 2:
        return None
    n = len(content)
    return ApplicationHeader(
        input_output_identifier=content[0:1],
        message_type=content[1:4],
        input_time=content[4:8] if n > 9 else "",
        input_date=content[8:14] if n > 15 else "",
        bank_priority=content[14:15] if n > 16 else "",
        message_input_reference=content[15:31] if n > 31 else "",
    )


def _decode_tagged(pairs: List[Tuple[str, str]], table: Mapping[str, Tuple[str, Callable[[str], Any]]]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    accumulated: Dict[str, List[Any]] = {}
    for tag, raw in pairs:
        entry = table.get(tag)
        if entry is None:
            logging.debug("ignoring unrecognised tag %s", tag)
            continue
        field_name, decoder = entry
        try:
            decoded = decoder(raw)
        except ValueError as e:
            logging.debug("tag %s left unset: %s", tag, e)
            continue
        if tag in ACCUMULATING_TAGS:
            if decoded is None:
                logging.debug("dropping unparseable %s value %r", tag, raw)
                continue
            accumulated.setdefault(field_name, []).append(decoded)
        else:
            values[field_name] = decoded
    for field_name, items in accumulated.items():
        values[field_name] = tuple(items)
    return values


def decode_user_header(content: str) -> UserHeader:
    return UserHeader(**_decode_tagged(scan_tags(content, SUBBLOCK_PATTERN), USER_HEADER_FIELDS))


def decode_text_body(content: str) -> TextBody:
    content = TEXT_END_PATTERN.sub("", content)
    return TextBody(**_decode_tagged(scan_tags(content, TAG_PATTERN), TEXT_BODY_FIELDS))


def decode_trailer(content: str) -> Trailer:
    return Trailer(**_decode_tagged(scan_tags(content, SUBBLOCK_PATTERN), TRAILER_FIELDS))


BLOCK_DECODERS: Mapping[str, Tuple[str, Callable[[str], Any]]] = {
    "1": ("basic_header", decode_basic_header),
    "2": ("application_header", decode_application_header),
    "3": ("user_header", decode_user_header),
    "4": ("text_body", decode_text_body),
    "5": ("trailer", decode_trailer),
}


def parse(swift_message: str) -> Message:
    if swift_message is None or not swift_message.strip():
        raise ValueError("SWIFT message must not be empty")

    parts: Dict[str, Any] = {}
    for block_id, content in extract_blocks(swift_message).items():
        entry = BLOCK_DECODERS.get(block_id)
        if entry is None:
            logging.debug("ignoring block %s", block_id)
            continue
        record_name, decoder = entry
        parts[record_name] = decoder(content)
    return Message(**parts)
