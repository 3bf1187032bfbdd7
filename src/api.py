import logging
from fastapi import FastAPI, File, UploadFile, Body, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from engine import decode_mt_bytes, decode_mt_text
from config import get_config

config = get_config()
MAX_REQUEST_KB = config.api.max_request_kb

logging.basicConfig(level=config.logging.level.upper())

app = FastAPI(title="SWIFT MT Decoder API", version="0.1.0", debug=config.api.debug)

class DecodeRequest(BaseModel):
    message: str

def _enforce_size(n_bytes: int):
    limit = MAX_REQUEST_KB * 1024
    if n_bytes > limit:
        raise HTTPException(status_code=413, detail="payload too large")

@app.get("/health")
def health():
    return {"status": "ok"}

@app.post("/decode")
def decode(req: DecodeRequest = Body(...)):
    try:
        _enforce_size(len(req.message.encode("utf-8")))
        result = decode_mt_text(req.message)
    except HTTPException:
        raise
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return JSONResponse(content=result, headers={"X-Message-Type": result["metadata"]["messageType"] or ""})

@app.post("/decode/file")
async def decode_file(file: UploadFile = File(...)):
    mt_bytes = await file.read()
    _enforce_size(len(mt_bytes))
    try:
        result = decode_mt_bytes(mt_bytes)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return JSONResponse(content=result, headers={"X-Message-Type": result["metadata"]["messageType"] or ""})

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=config.api.host, port=config.api.port)
