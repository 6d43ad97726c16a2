"""Click CLI for calling the Deliverect API and checking webhook signatures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import click
from pydantic import SecretStr

from deliverect_connector.catalog.operations import RESOURCES, list_operations
from deliverect_connector.client.client import DeliverectClient
from deliverect_connector.errors import (
    DeliverectError,
    InvalidJsonPayload,
    WebhookVerificationError,
)
from deliverect_connector.models import DEFAULT_DOMAIN, KNOWN_DOMAINS, DeliverectCredentials
from deliverect_connector.webhook.models import SIGNATURE_HEADER, WebhookEnvelope
from deliverect_connector.webhook.verifier import compute_signature, handle, parse_body


def _split_pairs(pairs: tuple[str, ...], decode: bool) -> dict[str, Any]:
    params: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"Expected key=value, got '{pair}'")
        if decode:
            try:
                params[key] = json.loads(value)
            except json.JSONDecodeError as exc:
                raise click.BadParameter(f"Invalid JSON for '{key}': {exc}") from exc
        else:
            params[key] = value
    return params


@click.group()
@click.option(
    "--domain", envvar="DELIVERECT_DOMAIN", default=DEFAULT_DOMAIN,
    type=click.Choice(sorted(KNOWN_DOMAINS)), help="Deliverect API domain.",
)
@click.option("--client-id", envvar="DELIVERECT_CLIENT_ID", default="", help="M2M client ID.")
@click.option(
    "--client-secret", envvar="DELIVERECT_CLIENT_SECRET", default="", help="M2M client secret.",
)
@click.pass_context
def cli(ctx: click.Context, domain: str, client_id: str, client_secret: str) -> None:
    """Deliverect API and webhook tooling."""
    ctx.ensure_object(dict)
    ctx.obj["credentials"] = DeliverectCredentials(
        client_id=client_id,
        client_secret=SecretStr(client_secret),
        domain=domain,
    )


@cli.command()
@click.option("--resource", type=click.Choice(sorted(RESOURCES)), default=None)
def operations(resource: str | None) -> None:
    """List catalog operations."""
    output = [spec.summary() for spec in list_operations(resource)]
    click.echo(json.dumps(output, indent=2))


@cli.command()
@click.argument("resource")
@click.argument("operation")
@click.option("-p", "--param", "params", multiple=True, help="String parameter key=value.")
@click.option("-j", "--json-param", "json_params", multiple=True, help="JSON parameter key=value.")
@click.pass_context
def call(
    ctx: click.Context,
    resource: str,
    operation: str,
    params: tuple[str, ...],
    json_params: tuple[str, ...],
) -> None:
    """Execute RESOURCE OPERATION and print the records as JSON."""
    values = {**_split_pairs(params, decode=False), **_split_pairs(json_params, decode=True)}
    try:
        with DeliverectClient(ctx.obj["credentials"]) as client:
            records = client.execute(resource, operation, values)
    except DeliverectError as exc:
        raise click.ClickException(f"{exc.kind}: {exc}") from exc
    click.echo(json.dumps(records, indent=2))


@cli.command()
@click.argument("body_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--secret", envvar="DELIVERECT_WEBHOOK_SECRET", required=True)
def sign(body_file: str, secret: str) -> None:
    """Print the webhook signature for the exact bytes of BODY_FILE."""
    click.echo(compute_signature(secret, Path(body_file).read_bytes()))


@cli.command()
@click.argument("body_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--secret", envvar="DELIVERECT_WEBHOOK_SECRET", required=True)
@click.option("--signature", required=True, help="Hex signature as sent by Deliverect.")
@click.pass_context
def verify(ctx: click.Context, body_file: str, secret: str, signature: str) -> None:
    """Verify and classify a captured webhook delivery."""
    raw_body = Path(body_file).read_bytes()
    try:
        envelope = WebhookEnvelope(
            headers={SIGNATURE_HEADER: signature},
            raw_body=raw_body,
            parsed_body=parse_body(raw_body),
        )
        event = handle(envelope, lambda: secret)
    except InvalidJsonPayload as exc:
        raise click.ClickException(f"Body is not valid JSON: {exc.detail}") from exc
    except WebhookVerificationError as exc:
        click.echo(f"Rejected ({exc.kind}): {exc}", err=True)
        ctx.exit(1)
    click.echo(json.dumps(event, indent=2))

