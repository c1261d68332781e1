import json
import logging
import os

from aiohttp import web

from solfaucet.core.live_config import config
from solfaucet.exec import claim_orchestrator as co
from solfaucet.utils.logger import log_event

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

# outcome status -> (http status, error message)
CLAIM_ERRORS = {
    co.NOT_CONFIGURED: (500, "Faucet not configured"),
    co.INVALID_WALLET: (400, "Invalid wallet address"),
    co.INVALID_ADDRESS: (400, "Invalid Solana address"),
    co.FAUCET_EMPTY: (503, "Faucet is empty! Check back later."),
    co.TRANSFER_FAILED: (500, "Transaction failed. Try again."),
}
GENERIC_ERROR = (500, "Transaction failed. Try again.")


@web.middleware
async def cors_middleware(request, handler):
    try:
        response = await handler(request)
    except web.HTTPException as exc:
        exc.headers.update(CORS_HEADERS)
        raise
    response.headers.update(CORS_HEADERS)
    return response


class FaucetApi:
    def __init__(self, orchestrator, public_dir=None, recent_claims_shown=None):
        self.orchestrator = orchestrator
        self.public_dir = os.path.abspath(public_dir or config.get("public_dir", "public"))
        self.recent_claims_shown = (
            config.get("recent_claims_shown", 10) if recent_claims_shown is None else recent_claims_shown
        )
        self.app = web.Application(middlewares=[cors_middleware])
        self.app.add_routes([
            web.get("/api/info", self.handle_info),
            web.post("/api/claim", self.handle_claim),
            web.options("/{tail:.*}", self.handle_options),
            web.get(r"/{tail:(?!api/).*}", self.handle_static),
        ])
        self._runner = None

    async def start(self, host="0.0.0.0", port=None):
        port = port or int(config.get("port", 3004))
        self._runner = web.AppRunner(self.app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, host, port)
        await site.start()
        log_event(f"🚰 SOL Faucet running at http://localhost:{port}")

    async def stop(self):
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None

    async def handle_options(self, request):
        return web.Response(status=200)

    async def handle_info(self, request):
        info = await self.orchestrator.info(self.recent_claims_shown)
        return web.json_response(info)

    async def handle_claim(self, request):
        try:
            try:
                data = json.loads(await request.text())
            except ValueError:
                data = None
            wallet = data.get("wallet") if isinstance(data, dict) else None

            outcome = await self.orchestrator.claim(wallet)
            if outcome.ok:
                return web.json_response({"success": True, "txHash": outcome.tx_hash})
            if outcome.status == co.COOLDOWN_ACTIVE:
                return _error(429, f"Please wait {outcome.hours_remaining} more hours before claiming again")
            return _error(*CLAIM_ERRORS.get(outcome.status, GENERIC_ERROR))
        except Exception as e:
            logging.exception(f"❌ Claim error: {e}")
            return _error(*GENERIC_ERROR)

    async def handle_static(self, request):
        rel = request.match_info.get("tail", "") or "index.html"
        path = os.path.abspath(os.path.join(self.public_dir, rel))
        if not path.startswith(self.public_dir + os.sep) or not os.path.isfile(path):
            return web.Response(text="Not found", status=404)
        return web.FileResponse(path)


def _error(status, message):
    return web.json_response({"success": False, "error": message}, status=status)
