from typing import Any, Dict, List, MutableMapping, Optional, Tuple

from models import Message
from values import CurrencyAmount, PartyInfo


def _normalize_value(value: Any) -> Any:
    if isinstance(value, str):
        value = value.strip()
        return value or None
    if isinstance(value, (list, tuple)):
        normalized_list: List[Any] = []
        for item in value:
            normalized_item = _normalize_value(item)
            if normalized_item is not None:
                normalized_list.append(normalized_item)
        return normalized_list or None
    return value


def _add_if_value(target: MutableMapping[str, Any], key: str, value: Any) -> None:
    normalized = _normalize_value(value)
    if normalized is not None:
        target[key] = normalized


def _party_record(role: str, party: Optional[PartyInfo]) -> Optional[Dict[str, Any]]:
    if party is None:
        return None
    party_record: Dict[str, Any] = {"Role": role, "Name": _normalize_value(party.name) or _normalize_value(party.account)}
    _add_if_value(party_record, "Account", party.account)
    return party_record


def _add_amount(target: MutableMapping[str, Any], prefix: str, amount: Optional[CurrencyAmount]) -> None:
    if amount is None:
        return
    _add_if_value(target, f"{prefix} Value Date", amount.value_date.isoformat() if amount.value_date else None)
    _add_if_value(target, f"{prefix} Currency", amount.currency)
    _add_if_value(target, f"{prefix} Amount", str(amount.amount) if amount.amount is not None else None)


def returnitems(message: Message) -> Tuple[List[Dict[str, Any]], Dict[str, Any]]:
    """
    Flatten a decoded message into display records.

    Returns the parties (ordering customer, ordering institution, beneficiary)
    and one transaction record keyed by readable labels; empty values are
    left out of both.
    """
    party_infos: List[Dict[str, Any]] = []
    transaction_info: Dict[str, Any] = {}

    _add_if_value(transaction_info, "Message Type", message.message_type)

    basic = message.basic_header
    if basic is not None:
        _add_if_value(transaction_info, "Logical Terminal", basic.logical_terminal_address)
        _add_if_value(transaction_info, "Session Number", basic.session_number)
        _add_if_value(transaction_info, "Sequence Number", basic.sequence_number)

    application = message.application_header
    if application is not None:
        direction = {"I": "Input", "O": "Output"}.get(application.input_output_identifier)
        _add_if_value(transaction_info, "Direction", direction or application.input_output_identifier)
        _add_if_value(transaction_info, "Priority", application.bank_priority)

    user = message.user_header
    if user is not None:
        _add_if_value(transaction_info, "MIR", user.mir)
        _add_if_value(transaction_info, "Service Type", user.service_type)
        _add_if_value(transaction_info, "UETR", user.unique_end_to_end_reference)

    body = message.text_body
    if body is not None:
        _add_if_value(transaction_info, "Reference", body.transaction_reference)
        _add_if_value(transaction_info, "Bank Operation Code", body.bank_operation_code)
        _add_amount(transaction_info, "Settlement", body.value_date_currency_amount)
        _add_amount(transaction_info, "Instructed", body.instructed_currency_amount)
        _add_if_value(transaction_info, "Details Of Payment", body.details_of_payment)
        _add_if_value(transaction_info, "Details Of Charges", body.details_of_charges)
        _add_if_value(transaction_info, "Charges", [str(charge) for charge in body.charges])
        _add_if_value(transaction_info, "Sender To Receiver Information", body.sender_to_receiver_information)

        institution = _normalize_value(body.ordering_institution)
        for record in (
            _party_record("Ordering Customer", body.ordering_customer),
            {"Role": "Ordering Institution", "Name": institution} if institution else None,
            _party_record("Beneficiary", body.beneficiary),
        ):
            if record is not None:
                party_infos.append(record)

    return party_infos, transaction_info
