from __future__ import annotations
from dataclasses import dataclass, field, fields, is_dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from values import CurrencyAmount, PartyInfo


@dataclass(frozen=True)
class BasicHeader:
    application_id: str = ""
    service_id: str = ""
    logical_terminal_address: str = ""
    session_number: str = ""
    sequence_number: str = ""


@dataclass(frozen=True)
class ApplicationHeader:
    input_output_identifier: str = ""
    message_type: str = ""
    input_time: str = ""
    input_date: str = ""
    bank_priority: str = ""
    message_input_reference: str = ""


@dataclass(frozen=True)
class UserHeader:
    mir: Optional[str] = None
    service_type: Optional[str] = None
    unique_end_to_end_reference: Optional[str] = None


@dataclass(frozen=True)
class TextBody:
    transaction_reference: Optional[str] = None
    bank_operation_code: Optional[str] = None
    value_date_currency_amount: Optional[CurrencyAmount] = None
    instructed_currency_amount: Optional[CurrencyAmount] = None
    ordering_customer: Optional[PartyInfo] = None
    ordering_institution: Optional[str] = None
    beneficiary: Optional[PartyInfo] = None
    details_of_payment: Optional[str] = None
    details_of_charges: Optional[str] = None
    charges: Tuple[Decimal, ...] = field(default_factory=tuple)
    sender_to_receiver_information: Optional[str] = None


@dataclass(frozen=True)
class Trailer:
    message_authentication_code: Optional[str] = None
    checksum: Optional[str] = None


@dataclass(frozen=True)
class Message:
    """
    A decoded SWIFT MT message.

    Each block record is None when its block was not present in the input,
    so callers judge completeness from which records (and fields) are set.
    """

    basic_header: Optional[BasicHeader] = None
    application_header: Optional[ApplicationHeader] = None
    user_header: Optional[UserHeader] = None
    text_body: Optional[TextBody] = None
    trailer: Optional[Trailer] = None

    @property
    def message_type(self) -> Optional[str]:
        mt = self.application_header.message_type if self.application_header else ""
        return f"MT{mt}" if mt else None

    def blocks(self) -> list[str]:
        present = []
        for number, record in enumerate(
            (self.basic_header, self.application_header, self.user_header, self.text_body, self.trailer),
            start=1,
        ):
            if record is not None:
                present.append(str(number))
        return present


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _jsonable(value: Any) -> Any:
    if value is None:
        return None
    if is_dataclass(value):
        return {_camel(f.name): _jsonable(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_jsonable(item) for item in value]
    return value


def message_to_dict(message: Message) -> Dict[str, Any]:
    return _jsonable(message)
