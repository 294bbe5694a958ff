"""Command line interface for trying out token exchange requests."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

import typer
from pydantic import ValidationError

from tokenexchange import (
    Actor,
    ClientAuthentication,
    GrantValidationContext,
    TokenExchangeError,
    TokenExchangeRequestParser,
    ValidatedTokenRequest,
    build_token_exchange_grant,
    load_config,
)

app = typer.Typer(help="CLI for OAuth 2.0 token exchange")

actor_app = typer.Typer(help="Commands for inspecting act claims")

app.add_typer(actor_app, name="actor")


@app.callback()
def main() -> None:
    """tokenexchange CLI entry point."""
    pass


def _parse_params(pairs: List[str]) -> Dict[str, List[str]]:
    params: Dict[str, List[str]] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            typer.secho(f"Expected key=value, got: {pair}", fg=typer.colors.RED)
            raise typer.Exit(code=2)
        params.setdefault(key, []).append(value)
    return params


@app.command("parse")
def parse(
    client_id: str,
    param: List[str] = typer.Option([], "--param", "-p", help="Request parameter as key=value"),
) -> None:
    """
    Parse token exchange request parameters and print the result.

    Example:
        tokenexchange parse api1 -p grant_type=urn:ietf:params:oauth:grant-type:token-exchange \\
            -p subject_token=abc -p subject_token_type=urn:ietf:params:oauth:token-type:access_token
    """
    params = _parse_params(param)
    try:
        request = TokenExchangeRequestParser().parse(client_id, params)
    except TokenExchangeError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(code=1)
    typer.echo(request.model_dump_json(indent=2))


@app.command("exchange")
def exchange(
    client_id: str,
    param: List[str] = typer.Option([], "--param", "-p", help="Request parameter as key=value"),
    client_secret: Optional[str] = typer.Option(
        None, help="Treat the client as authenticated with this secret"
    ),
    config: Optional[Path] = typer.Option(None, help="Path to a YAML config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """
    Run a token exchange request through the grant and print the response.

    Subject tokens are validated with the backend configured under
    ``token_validator``. On success the subject, the claims to issue and the
    extra response parameters are printed; on failure the OAuth error body is
    printed and the command exits with code 1.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    settings = load_config(str(config) if config else None)
    grant = build_token_exchange_grant(config=settings)
    authentication = (
        ClientAuthentication(method="client_secret_post", credential=client_secret)
        if client_secret
        else None
    )
    context = GrantValidationContext(
        request=ValidatedTokenRequest(
            client_id=client_id,
            raw=_parse_params(param),
            client_authentication=authentication,
        )
    )
    asyncio.run(grant.validate(context))

    result = context.result
    if result.is_error:
        typer.echo(json.dumps(result.to_response(), indent=2))
        raise typer.Exit(code=1)

    body = {
        "subject": result.subject,
        "client_id": context.request.client_id,
        "claims": [claim.model_dump(exclude_none=True) for claim in result.claims],
        **result.to_response(),
    }
    typer.echo(json.dumps(body, indent=2))


@actor_app.command("decode")
def actor_decode(value: str) -> None:
    """Print the delegation chain of an ``act`` claim, most recent actor first."""
    try:
        actor = Actor.from_json(value)
    except ValidationError:
        typer.secho("Not a valid act claim", fg=typer.colors.RED)
        raise typer.Exit(code=1)

    for depth, link in enumerate(actor.chain()):
        fields = link.model_dump(by_alias=True, exclude_none=True, exclude={"inner_actor"})
        description = ", ".join(f"{k}={v}" for k, v in fields.items()) or "(empty)"
        typer.echo(f"{'  ' * depth}- {description}")
