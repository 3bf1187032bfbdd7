import json
import logging
import sys
from pathlib import Path
from engine import decode_mt_bytes
from config import get_config

cfg = get_config()

#Sample MT103 file
mtpath = cfg.paths.SAMPLE_PATH

def main(mtpath):
    #Decodes the message and returns the readable response
    response = decode_mt_bytes(Path(mtpath).read_bytes())
    print(json.dumps(response, indent=2, ensure_ascii=False))
    logging.info("parties found: %d", len(response["parties"]))
    return response

if __name__ == "__main__":
    logging.basicConfig(level=cfg.logging.level.upper())
    main(sys.argv[1] if len(sys.argv) > 1 else mtpath)
