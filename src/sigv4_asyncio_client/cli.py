#!/usr/bin/env python3
"""Command line interface for signing and sending AWS SigV4 requests."""

import asyncio
import logging
import sys

import click
from yarl import URL

from .auth import AWSSignatureV4
from .client import AWSClient
from .config import load_aws_profile, load_env_profile
from .encoding import query_parameters_all
from .exceptions import AWSError
from .models import Request, ServiceMetadata


def request_options(command):
    options = [
        click.argument("method"),
        click.argument("url"),
        click.option("--service", required=True, help="Service endpoint prefix"),
        click.option("--signing-name", help="Service name for the credential scope"),
        click.option("--region", help="Region, defaults to the profile's region"),
        click.option(
            "-H", "--header", "headers", multiple=True, help="Header as 'Name: value'"
        ),
        click.option("--data", default="", help="Request body"),
    ]
    for option in reversed(options):
        command = option(command)
    return command


def parse_headers(headers: tuple[str, ...]) -> dict[str, str]:
    parsed = {}
    for header in headers:
        name, sep, value = header.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(
                f"Invalid header '{header}'", param_hint="--header"
            )
        parsed[name.strip()] = value.strip()
    return parsed


def build_request(ctx, method, url, service, signing_name, region, headers, data):
    profile = ctx.obj["profile"]
    signer = AWSSignatureV4(
        profile.credentials,
        region or profile.region,
        ServiceMetadata(service, signing_name),
    )
    request = Request(method.upper(), URL(url), parse_headers(headers), data)
    return signer, request


@click.group()
@click.option("--config-file", help="Path to AWS config file")
@click.option("--credentials-file", help="Path to AWS credentials file")
@click.option("--profile", default="default", help="Profile name in the config file")
@click.option("-v", "--verbose", is_flag=True, help="Log canonical requests")
@click.pass_context
def cli(ctx, config_file, credentials_file, profile, verbose):
    """sigv4 - sign and send AWS Signature Version 4 requests."""
    ctx.ensure_object(dict)

    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        if config_file or credentials_file:
            ctx.obj["profile"] = load_aws_profile(
                profile, config_file, credentials_file
            )
        else:
            ctx.obj["profile"] = load_env_profile()
    except ValueError as e:
        click.echo(f"Error loading credentials: {e}", err=True)
        sys.exit(1)


@cli.command()
@request_options
@click.pass_context
def sign(ctx, method, url, service, signing_name, region, headers, data):
    """Print the headers of a signed request."""
    signer, request = build_request(
        ctx, method, url, service, signing_name, region, headers, data
    )
    signer.sign_request(request)

    for name, value in request.headers.items():
        click.echo(f"{name}: {value}")


@cli.command()
@request_options
@click.pass_context
def canonical(ctx, method, url, service, signing_name, region, headers, data):
    """Print the canonical request that gets signed."""
    signer, request = build_request(
        ctx, method, url, service, signing_name, region, headers, data
    )
    _, payload_hash = signer.prepare_request(request)
    click.echo(signer.canonical_request(request, payload_hash))


@cli.command()
@request_options
@click.pass_context
def request(ctx, method, url, service, signing_name, region, headers, data):
    """Sign and send a request, then print the response body."""
    profile = ctx.obj["profile"]
    url = URL(url)

    async def _request():
        client = AWSClient(
            profile.credentials,
            region or profile.region,
            ServiceMetadata(service, signing_name),
            endpoint_url=url.origin(),
        )
        async with client:
            return await client.request(
                method,
                path=url.path,
                headers=parse_headers(headers),
                params=query_parameters_all(url),
                data=data,
            )

    try:
        result = asyncio.run(_request())
    except AWSError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"HTTP {result['status']}", err=True)
    click.echo(result["body"].decode("utf-8", errors="replace"))


if __name__ == "__main__":
    cli()
