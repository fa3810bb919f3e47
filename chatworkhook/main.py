"""chatworkhook entry point: run the receiver or check a captured webhook."""

from __future__ import annotations

import asyncio
import signal
import sys
from pathlib import Path

import click

from chatworkhook.config import Settings, load_settings
from chatworkhook.errors import PayloadError
from chatworkhook.hook import Hook
from chatworkhook.models import encode_payload
from chatworkhook.server import WebhookServer
from chatworkhook.utils.logging import get_logger, setup_logging

log = get_logger(__name__)


async def _log_hook(hook: Hook) -> None:
    payload = hook.payload
    log.info(
        "webhook_event",
        event_type=payload.event_type.value,
        room_id=payload.event.room_id,
        account_id=payload.event.account_id,
        from_account_id=payload.event.from_account_id,
        body=payload.event.body,
    )


async def run(settings: Settings) -> None:
    server = WebhookServer(settings.receiver, settings.secret, handler=_log_hook)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    def _signal_handler() -> None:
        log.info("shutdown_signal")
        stop_event.set()

    if sys.platform != "win32":
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, _signal_handler)

    await server.start()

    try:
        if sys.platform == "win32":
            while not stop_event.is_set():
                await asyncio.sleep(1)
        else:
            await stop_event.wait()
    except KeyboardInterrupt:
        pass
    finally:
        await server.stop()


@click.group()
@click.option("--config", "config_path", default=None, help="Path to config YAML file")
@click.option("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """Verify and decode ChatWork webhooks."""
    settings = load_settings(config_path)
    if log_level:
        settings.log_level = log_level
    setup_logging(level=settings.log_level, json_output=settings.log_json)
    ctx.obj = settings


@cli.command()
@click.pass_obj
def serve(settings: Settings) -> None:
    """Run the webhook receiver until interrupted."""
    asyncio.run(run(settings))


@cli.command()
@click.argument("body_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--signature", required=True, help="Value of the X-ChatWorkWebhookSignature header")
@click.option("--secret", default=None, help="Webhook token; defaults to the configured secret")
@click.pass_obj
def verify(settings: Settings, body_file: Path, signature: str, secret: str | None) -> None:
    """Check the signature of a captured body and print the decoded payload."""
    hook = Hook(signature=signature, raw_payload=body_file.read_bytes())
    try:
        hook.verify_and_decode(secret or settings.secret, strict=False)
    except PayloadError as exc:
        click.echo(f"decode failed: {exc}", err=True)
        sys.exit(1)

    click.echo(encode_payload(hook.payload).decode("utf-8"))
    if not hook.verified:
        click.echo(f"signature check failed: {hook.signature_error}", err=True)
        sys.exit(1)
    click.echo("signature ok", err=True)


if __name__ == "__main__":
    cli()
