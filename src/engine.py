import hashlib
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from models import message_to_dict
from mtparser import parse
from returnitems import returnitems


def decode_mt_bytes(mt_bytes: bytes) -> Dict[str, Any]:
    ingest_hash = "sha256:" + hashlib.sha256(mt_bytes or b"").hexdigest()
    b = mt_bytes[3:] if mt_bytes.startswith(b"\xef\xbb\xbf") else mt_bytes
    return _build_response(b.decode("utf-8", errors="replace"), ingest_hash)


def decode_mt_text(text: str) -> Dict[str, Any]:
    ingest_hash = "sha256:" + hashlib.sha256((text or "").encode("utf-8")).hexdigest()
    return _build_response(text, ingest_hash)


def _build_response(text: str, ingest_hash: str) -> Dict[str, Any]:
    message = parse(text)
    party_infos, transaction_info = returnitems(message)
    blocks = message.blocks()
    if not blocks:
        logging.info("no SWIFT blocks found in message %s", ingest_hash)
    else:
        logging.info("decoded %s with blocks %s", message.message_type or "message", ",".join(blocks))
    return {
        "message": message_to_dict(message),
        "parties": party_infos,
        "transaction": transaction_info,
        "metadata": {
            "apiVersion": "1.0",
            "responseId": str(uuid.uuid4()),
            "messageStandard": "SWIFT MT",
            "messageType": message.message_type,
            "blocks": blocks,
            "ingestHash": ingest_hash,
            "decodedAt": datetime.now(timezone.utc).isoformat(),
        },
    }
