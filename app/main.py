import logging
from typing import Optional

from fastapi import FastAPI, HTTPException

from .config import Settings, get_settings
from .errors import InvalidContext, NoEligibleRoute
from .models import MidConfig, MidStatusUpdate, PaymentContext, RouteDecision, RouteRequest
from .registry import MerchantDirectory, MidRegistry, WeightRegistry
from .routing import decide_route
from .storage import IdempotencyConflict, IdempotencyStore, request_key


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.log_level)

    mids = MidRegistry(path=str(settings.mid_settings_path))
    weights = WeightRegistry(path=str(settings.routing_weights_path))
    merchants = MerchantDirectory(path=str(settings.merchant_settings_path))
    idempotency = IdempotencyStore(max_entries=settings.idempotency_max_entries)

    app = FastAPI(title="MID Routing Service", version="1.0.0")

    @app.get("/health")
    def health():
        snapshot = mids.list()
        return {"ok": True, "mids": len(snapshot), "active": sum(m.status == "ACTIVE" for m in snapshot)}

    @app.get("/admin/mids")
    def list_mids():
        return {"mids": [m.model_dump() for m in mids.list()]}

    @app.patch("/admin/mid-settings", response_model=MidConfig)
    def set_status(body: MidStatusUpdate):
        if not body.mid_id or not body.status:
            raise HTTPException(status_code=400, detail="Missing required fields: mid_id, status")
        try:
            updated = mids.set_status(body.mid_id, body.status)
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        if updated is None:
            raise HTTPException(status_code=404, detail=f"MID not found with id: {body.mid_id}")
        return updated

    @app.post("/admin/reload")
    def reload_config():
        mids.reload()
        weights.reload()
        merchants.reload()
        idempotency.clear()
        return {"ok": True, "mids": [m.id for m in mids.list()]}

    @app.post("/card/routes", response_model=RouteDecision)
    def route(req: RouteRequest):
        mode = req.mode or settings.default_mode
        key = request_key(req, mode)

        # Same idempotency key, same decision
        if req.idempotency_key:
            try:
                prev = idempotency.get(req.idempotency_key, key)
            except IdempotencyConflict as exc:
                raise HTTPException(status_code=422, detail=str(exc))
            if prev:
                return prev

        merchant = merchants.find(req.business_id)
        if merchant is None:
            raise HTTPException(status_code=404, detail=f"Merchant not found for business_id: {req.business_id}")

        ctx = PaymentContext.for_merchant(req.country, req.currency, merchant)
        try:
            decision = decide_route(mids.list(), weights.table(), ctx, mode)
        except InvalidContext as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        except NoEligibleRoute as exc:
            raise HTTPException(status_code=404, detail=str(exc))

        if req.idempotency_key:
            idempotency.put(req.idempotency_key, key, decision)

        return decision

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=get_settings().host, port=get_settings().port)
