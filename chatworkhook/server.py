"""Webhook HTTP receiver using aiohttp."""

from __future__ import annotations

from typing import Awaitable, Callable

from aiohttp import web

from chatworkhook.config import ReceiverConfig
from chatworkhook.errors import (
    BodyReadError,
    MissingSignatureError,
    PayloadError,
    SignatureError,
    UnsupportedMethodError,
)
from chatworkhook.hook import Hook, extract_signature
from chatworkhook.utils.logging import get_logger

log = get_logger(__name__)

HookHandler = Callable[[Hook], Awaitable[None]]


class WebhookServer:
    """Receives ChatWork webhooks and hands verified hooks to a callback."""

    def __init__(
        self,
        config: ReceiverConfig,
        secret: str,
        handler: HookHandler | None = None,
    ) -> None:
        self._config = config
        self._secret = secret
        self._handler = handler
        self._runner: web.AppRunner | None = None

    @property
    def path(self) -> str:
        path = self._config.path
        return path if path.startswith("/") else f"/{path}"

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        if not self._secret:
            log.warning(
                "webhook_no_secret",
                path=self.path,
                msg="No webhook token configured, all requests will be rejected.",
            )
        app = self.build_app()
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self._config.bind, self._config.port)
        await site.start()
        log.info(
            "webhook_server_started",
            bind=self._config.bind,
            port=self._config.port,
            path=self.path,
        )

    async def stop(self) -> None:
        if self._runner is not None:
            await self._runner.cleanup()
            self._runner = None
        log.info("webhook_server_stopped")

    # ------------------------------------------------------------------
    # App construction
    # ------------------------------------------------------------------

    def build_app(self) -> web.Application:
        app = web.Application()
        # Every method is routed here so non-POST requests get a typed rejection
        app.router.add_route("*", self.path, self._handle_webhook)
        return app

    # ------------------------------------------------------------------
    # Request handling
    # ------------------------------------------------------------------

    async def _handle_webhook(self, request: web.Request) -> web.Response:
        try:
            hook = await self._read_hook(request)
        except UnsupportedMethodError as exc:
            return web.Response(status=405, text=str(exc), headers={"Allow": "POST"})
        except MissingSignatureError as exc:
            log.warning("webhook_rejected", reason="missing_signature", remote=request.remote)
            return web.Response(status=401, text=str(exc))
        except BodyReadError as exc:
            log.warning("webhook_rejected", reason="body_read", error=str(exc))
            return web.Response(status=400, text="Unreadable body")

        if not self._secret:
            return web.Response(status=401, text="Invalid signature")

        try:
            hook.verify_and_decode(self._secret)
        except SignatureError as exc:
            log.warning("webhook_rejected", reason="signature", error=str(exc), remote=request.remote)
            return web.Response(status=401, text="Invalid signature")
        except PayloadError as exc:
            log.warning("webhook_rejected", reason="payload", error=str(exc))
            return web.Response(status=400, text=str(exc))

        payload = hook.payload
        log.info(
            "webhook_received",
            setting_id=payload.setting_id,
            event_type=payload.event_type.value,
            room_id=payload.event.room_id,
            message_id=payload.event.message_id,
        )

        if self._handler is not None:
            try:
                await self._handler(hook)
            except Exception:
                log.exception("webhook_handler_error", event_type=payload.event_type.value)
                return web.Response(status=500, text="Handler error")

        return web.Response(status=200, text="OK")

    async def _read_hook(self, request: web.Request) -> Hook:
        signature = extract_signature(
            request.method, request.headers, self._config.signature_header
        )
        try:
            raw = await request.read()
        except OSError as exc:
            raise BodyReadError(f"failed to read request body: {exc}") from exc
        return Hook(signature=signature, raw_payload=raw)
