"""
eas_schema.cli.main
===================

`eas-schema`: command-line access to the schema encoder: inspect a schema,
encode values into an ABI blob, decode a blob back into named values, and
convert CIDs to and from bytes32.

Examples
--------
    $ eas-schema parse "uint256 eventId, (address who, uint8 score)[] votes"
    $ eas-schema template "bool ok, uint8[] xs"
    $ eas-schema encode "uint256 id, string note" \
        --fields-json '[{"name":"id","type":"uint256","value":7},
                        {"name":"note","type":"string","value":"hi"}]'
    $ eas-schema decode "uint256 id, string note" 0x0000...
    $ eas-schema validate "uint256 id" 0x1234      # exit code 1
    $ eas-schema cid encode QmYwAPJzv5CZsnA625s3Xf2nemtYgPpHdWEz79ojWnPbdG

Configuration
-------------
- Log level            : `--log-level` or env `EAS_SCHEMA_LOG_LEVEL` (default: WARNING)
- Content-hash type    : env `EAS_SCHEMA_CONTENT_HASH_TYPE`  (default: ipfsHash)
- Content-hash field   : env `EAS_SCHEMA_CONTENT_HASH_FIELD` (default: ipfsHash)
- bytes32 overflow     : `--bytes32-overflow` or env `EAS_SCHEMA_BYTES32_OVERFLOW`
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, NoReturn, Optional

import typer

from ..config import SchemaConfig
from ..encoder import SchemaEncoder
from ..errors import EasSchemaError
from ..types.fields import DecodedField, NamedValue, to_jsonable
from ..utils.bytes import parse_bytes32_string, to_hex
from ..version import __version__
from . import cid as cid_cli

log = logging.getLogger(__name__)

app = typer.Typer(
    name="eas-schema",
    help="Attestation schema encoder: parse schemas, encode and decode ABI blobs.",
    no_args_is_help=True,
    add_completion=False,
)
app.add_typer(cid_cli.app, name="cid")

__all__ = ["app", "main", "run"]


@dataclass
class Ctx:
    config: SchemaConfig


def _print_json(obj: Any) -> None:
    typer.echo(json.dumps(to_jsonable(obj), indent=2, ensure_ascii=False))


@app.callback()
def _root(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ...).",
    ),
    bytes32_overflow: Optional[str] = typer.Option(
        None,
        "--bytes32-overflow",
        help="Policy for strings over 31 bytes in bytes32 fields: truncate | error.",
    ),
) -> None:
    """
    Resolve the effective configuration (env first, then flags) and set up logging.
    """
    try:
        config = SchemaConfig.with_overrides(
            None, log_level=log_level, bytes32_overflow=bytes32_overflow
        )
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    log.debug("effective config: %s", config)
    ctx.obj = Ctx(config=config)


def _encoder(ctx: typer.Context, schema: str) -> SchemaEncoder:
    c: Ctx = ctx.obj
    try:
        return SchemaEncoder(schema, config=c.config)
    except EasSchemaError as e:
        raise typer.BadParameter(str(e), param_hint="SCHEMA") from e


def _load_fields(fields_json: Optional[str], fields_file: Optional[Path]) -> List[Any]:
    if fields_json and fields_file:
        raise typer.BadParameter("Pass either --fields-json or --fields-file, not both")
    if fields_file:
        try:
            fields_json = fields_file.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise typer.BadParameter(f"File not found: {fields_file}") from e
    if fields_json is None:
        raise typer.BadParameter("One of --fields-json or --fields-file is required")
    try:
        parsed = json.loads(fields_json)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"fields must be valid JSON: {e}") from e
    if not isinstance(parsed, list):
        raise typer.BadParameter("fields must be a JSON array of {name, type, value}")
    return parsed


def _fail(e: Exception) -> NoReturn:
    typer.secho(f"error: {e}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


# --- Commands -----------------------------------------------------------------


@app.command("version")
def version() -> None:
    """Print the package version."""
    typer.echo(f"eas-schema {__version__}")


@app.command("env")
def env(ctx: typer.Context) -> None:
    """Show the effective configuration."""
    c: Ctx = ctx.obj
    _print_json({**c.config.to_dict(), "version": __version__})


@app.command("parse")
def parse(
    ctx: typer.Context,
    schema: str = typer.Argument(..., help="Schema, e.g. 'uint256 id, string note'"),
) -> None:
    """Print the parsed field descriptors."""
    _print_json([f.to_dict() for f in _encoder(ctx, schema).schema])


@app.command("template")
def template(
    ctx: typer.Context,
    schema: str = typer.Argument(..., help="Schema string"),
) -> None:
    """Print one {name, type, value} item per field, filled with defaults."""
    _print_json(_encoder(ctx, schema).template())


@app.command("encode")
def encode(
    ctx: typer.Context,
    schema: str = typer.Argument(..., help="Schema string"),
    fields_json: Optional[str] = typer.Option(
        None, "--fields-json", help="JSON array of {name, type, value}"
    ),
    fields_file: Optional[Path] = typer.Option(
        None, "--fields-file", help="Path to a JSON file with the fields array"
    ),
) -> None:
    """Encode values into a 0x-hex ABI blob."""
    enc = _encoder(ctx, schema)
    items = _load_fields(fields_json, fields_file)
    try:
        blob = enc.encode_data(items)
    except EasSchemaError as e:
        _fail(e)
    typer.echo(to_hex(blob))


def _bytes32_text(value: Any, typ: str) -> Any:
    """Replace bytes32 words that hold NUL-padded UTF-8 text with the text."""
    if isinstance(value, NamedValue):
        return NamedValue(value.name, value.type, _bytes32_text(value.value, value.type))
    if isinstance(value, list):
        element = typ[: typ.rindex("[")] if typ.endswith("]") else typ
        return [_bytes32_text(v, element) for v in value]
    if typ == "bytes32" and isinstance(value, bytes):
        try:
            return parse_bytes32_string(value)
        except ValueError:
            return value
    return value


@app.command("decode")
def decode(
    ctx: typer.Context,
    schema: str = typer.Argument(..., help="Schema string"),
    data: str = typer.Argument(..., help="0x-hex encoded data"),
    bytes32_text: bool = typer.Option(
        False,
        "--bytes32-text",
        help="Render bytes32 values holding UTF-8 text as strings (content-hash fields stay hex).",
    ),
) -> None:
    """Decode a blob into named fields (bytes printed as 0x-hex)."""
    enc = _encoder(ctx, schema)
    try:
        fields = enc.decode_data(data)
    except EasSchemaError as e:
        _fail(e)
    if bytes32_text:
        fields = [
            f
            if desc.content_hash
            else DecodedField(f.name, f.type, f.signature, _bytes32_text(f.value, f.type))
            for desc, f in zip(enc.schema, fields)
        ]
    _print_json(fields)


@app.command("validate")
def validate(
    ctx: typer.Context,
    schema: str = typer.Argument(..., help="Schema string"),
    data: str = typer.Argument(..., help="0x-hex encoded data"),
) -> None:
    """Exit 0 if the data decodes against the schema, 1 otherwise."""
    ok = _encoder(ctx, schema).is_encoded_data_valid(data)
    typer.echo("valid" if ok else "invalid")
    if not ok:
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point used by console_scripts."""
    app()


def run() -> None:  # pragma: no cover - alias
    main()


if __name__ == "__main__":  # pragma: no cover
    main()
