from fastapi import FastAPI, Header, Request
from fastapi.responses import JSONResponse, Response
import os
import uuid

app = FastAPI(title="Mock Airtime Provider", version="1.0.0")
# Token the mock accepts; the gateway's API_KEY must match
VALID_TOKEN = os.getenv("MOCK_PROVIDER_TOKEN", "test-token")

# Magic numbers for exercising failure paths
LOW_BALANCE_NUMBER = "08000000000"
OUTAGE_NUMBER = "09099999999"

@app.get("/health")
def health(): return {"status": "ok"}

@app.post("/api/topup/")
async def topup(request: Request, authorization: str = Header(default="")):
    if authorization != f"Token {VALID_TOKEN}":
        return JSONResponse(status_code=401, content={"detail": "Invalid token."})
    body = await request.json()
    if body.get("network") not in (1, 2, 3, 4):
        return JSONResponse(status_code=400, content={"message": "Invalid network id"})
    if body.get("mobile_number") == LOW_BALANCE_NUMBER:
        return JSONResponse(status_code=422, content={"detail": "Insufficient wallet balance"})
    if body.get("mobile_number") == OUTAGE_NUMBER:
        return Response(status_code=503)
    return JSONResponse(
        status_code=201,
        content={
            "id": str(uuid.uuid4()),
            "status": "successful",
            "message": f"Airtime of N{body.get('amount')} sent to {body.get('mobile_number')}",
            "amount": body.get("amount"),
        },
    )
