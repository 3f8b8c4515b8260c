"""
eas_schema.cli.cid
==================

Typer sub-commands for the schema-independent CID helpers.

    $ eas-schema cid encode Qm...        # -> 0x<32-byte digest>
    $ eas-schema cid decode 0x<digest>   # -> Qm...
    $ eas-schema cid check Qm...         # exit code 0 if parseable
"""

from __future__ import annotations

import typer

from ..codec.cid import decode_cid, encode_cid, is_cid
from ..errors import EasSchemaError
from ..utils.bytes import to_hex

app = typer.Typer(help="Convert CIDs to and from bytes32")

__all__ = ["app"]


@app.command("encode")
def encode(value: str = typer.Argument(..., help="CID string (v0 or v1)")) -> None:
    """Print the CID's sha2-256 digest as 0x-hex bytes32."""
    try:
        typer.echo(to_hex(encode_cid(value)))
    except EasSchemaError as e:
        typer.secho(f"error: {e}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)


@app.command("decode")
def decode(value: str = typer.Argument(..., help="0x-hex 32-byte digest")) -> None:
    """Print the CIDv0 for a sha2-256 digest."""
    try:
        typer.echo(decode_cid(value))
    except EasSchemaError as e:
        typer.secho(f"error: {e}", err=True, fg=typer.colors.RED)
        raise typer.Exit(code=1)


@app.command("check")
def check(value: str = typer.Argument(..., help="Candidate CID")) -> None:
    """Exit 0 if VALUE parses as a CID, 1 otherwise."""
    ok = is_cid(value)
    typer.echo("cid" if ok else "not a cid")
    if not ok:
        raise typer.Exit(code=1)
