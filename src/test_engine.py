from decimal import Decimal

from engine import decode_mt_bytes, decode_mt_text
from mtparser import parse
from returnitems import returnitems

MT103 = (
    "{1:F01BANKBEBBAXXX2222123456}{2:I103BANKDEFFXXXXN}"
    "{3:{121:eb6305c9-1f7f-49de-aed0-16487c27b42d}}"
    "{4:\n:20:REF123\n:23B:CRED\n:32A:250709EUR1000,50\n"
    ":50K:/DE89370400440532013000\nMAX MUSTERMANN\nBERLIN\n"
    ":52A:DEUTDEFF\n:59:JANE SMITH\n:71A:SHA\n:71F:EUR2,50\n-}"
)


def test_returnitems_parties_in_message_order():
    party_infos, _ = returnitems(parse(MT103))
    assert party_infos == [
        {"Role": "Ordering Customer", "Name": "MAX MUSTERMANN", "Account": "DE89370400440532013000"},
        {"Role": "Ordering Institution", "Name": "DEUTDEFF"},
        {"Role": "Beneficiary", "Name": "JANE SMITH"},
    ]


def test_returnitems_transaction_record():
    _, transaction_info = returnitems(parse(MT103))
    assert transaction_info["Message Type"] == "MT103"
    assert transaction_info["Direction"] == "Input"
    assert transaction_info["UETR"] == "eb6305c9-1f7f-49de-aed0-16487c27b42d"
    assert transaction_info["Reference"] == "REF123"
    assert transaction_info["Settlement Value Date"] == "2025-07-09"
    assert transaction_info["Settlement Currency"] == "EUR"
    assert transaction_info["Settlement Amount"] == str(Decimal("1000.50"))
    assert transaction_info["Charges"] == ["2.50"]
    assert "Instructed Amount" not in transaction_info
    assert "MIR" not in transaction_info


def test_returnitems_without_blocks():
    assert returnitems(parse("no blocks here")) == ([], {})


def test_decode_mt_text_metadata():
    response = decode_mt_text(MT103)
    metadata = response["metadata"]
    assert metadata["messageStandard"] == "SWIFT MT"
    assert metadata["messageType"] == "MT103"
    assert metadata["blocks"] == ["1", "2", "3", "4"]
    assert metadata["ingestHash"].startswith("sha256:")
    assert response["message"]["trailer"] is None
    assert response["message"]["userHeader"]["mir"] is None


def test_decode_mt_bytes_strips_bom_and_hashes_raw_bytes():
    raw = MT103.encode("utf-8")
    with_bom = decode_mt_bytes(b"\xef\xbb\xbf" + raw)
    without_bom = decode_mt_bytes(raw)
    assert with_bom["message"] == without_bom["message"]
    assert with_bom["metadata"]["ingestHash"] != without_bom["metadata"]["ingestHash"]
    assert without_bom["metadata"]["ingestHash"] == decode_mt_text(MT103)["metadata"]["ingestHash"]
