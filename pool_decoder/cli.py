"""pool-decoder — decode AMM pool accounts from the command line.

Account bytes come from the caller (an RPC dump, a file); this tool never
talks to a node.

  pool-decoder decode --program-id <ID> --data <base64> [--address <POOL>]
  pool-decoder batch accounts.json
  pool-decoder programs
"""

import argparse
import base64
import binascii
import json
import sys
from pathlib import Path
from typing import Optional

from loguru import logger
from solders.pubkey import Pubkey

from pool_decoder.config import apply_program_aliases, load_config
from pool_decoder.dispatcher import parse, parse_batch
from pool_decoder.errors import InvalidKey, ParseError, RegistrationError
from pool_decoder.log import setup_logger
from pool_decoder.models import UnifiedPool, protocol_name
from pool_decoder.registry import ProtocolRegistry, default_registry

EXIT_OK = 0
EXIT_PARSE_ERROR = 1
EXIT_CONFIG_ERROR = 2


def error_to_dict(error: ParseError, pubkey: Optional[str] = None) -> dict:
    return {
        "pubkey": pubkey,
        "error": type(error).__name__,
        "message": error.message,
        "protocol": protocol_name(error.protocol) if error.protocol is not None else None,
        "program_id": str(error.program_id) if error.program_id is not None else None,
    }


def _decode_account_field(data) -> bytes:
    """RPC accounts carry data as [payload, encoding] or a bare base64 string."""
    if isinstance(data, list):
        payload, encoding = data[0], data[1] if len(data) > 1 else "base64"
    else:
        payload, encoding = data, "base64"
    if encoding != "base64":
        raise ValueError(f"Unsupported account data encoding: {encoding}")
    return base64.b64decode(payload, validate=True)


def _read_input_bytes(args: argparse.Namespace) -> bytes:
    if args.data is not None:
        return base64.b64decode(args.data, validate=True)
    if args.hex is not None:
        return bytes.fromhex(args.hex)
    return Path(args.file).read_bytes()


def cmd_decode(args: argparse.Namespace, registry: ProtocolRegistry) -> int:
    try:
        data = _read_input_bytes(args)
    except (binascii.Error, ValueError, OSError) as e:
        logger.error(f"Could not read account data: {e}")
        return EXIT_CONFIG_ERROR

    try:
        pool = parse(args.program_id, data, args.address, registry=registry)
    except InvalidKey as e:
        logger.error(str(e))
        return EXIT_CONFIG_ERROR
    except ParseError as e:
        print(json.dumps(error_to_dict(e, args.address)))
        return EXIT_PARSE_ERROR

    print(pool.to_json(indent=2))
    return EXIT_OK


def cmd_batch(args: argparse.Namespace, registry: ProtocolRegistry) -> int:
    try:
        accounts = json.loads(Path(args.path).read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read {args.path}: {e}")
        return EXIT_CONFIG_ERROR

    inputs = []
    try:
        for item in accounts:
            account = item["account"]
            owner = Pubkey.from_string(account["owner"])
            address = Pubkey.from_string(item["pubkey"])
            inputs.append((owner, _decode_account_field(account["data"]), address))
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Malformed account entry in {args.path}: {e}")
        return EXIT_CONFIG_ERROR

    results = parse_batch(inputs, registry=registry)

    failed = 0
    for (_, _, pubkey), result in zip(inputs, results):
        if isinstance(result, UnifiedPool):
            print(result.to_json())
        else:
            failed += 1
            print(json.dumps(error_to_dict(result, str(pubkey))))

    logger.info(f"Decoded {len(results) - failed}/{len(results)} accounts")
    return EXIT_PARSE_ERROR if failed else EXIT_OK


def cmd_programs(args: argparse.Namespace, registry: ProtocolRegistry) -> int:
    for pid, protocol in sorted(registry.programs().items(), key=lambda kv: str(kv[0])):
        print(f"{pid}  {protocol_name(protocol)}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pool-decoder", description="Decode AMM pool accounts")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    decode = sub.add_parser("decode", help="decode one account")
    decode.add_argument("--program-id", required=True, help="owning program (base58)")
    decode.add_argument("--address", help="pool account address (base58)")
    source = decode.add_mutually_exclusive_group(required=True)
    source.add_argument("--data", help="account data, base64")
    source.add_argument("--hex", help="account data, hex")
    source.add_argument("--file", help="file holding raw account bytes")
    decode.set_defaults(handler=cmd_decode)

    batch = sub.add_parser("batch", help="decode a JSON array of RPC account objects")
    batch.add_argument("path")
    batch.set_defaults(handler=cmd_batch)

    programs = sub.add_parser("programs", help="list supported program ids")
    programs.set_defaults(handler=cmd_programs)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    setup_logger(level="DEBUG" if args.verbose else config.log_level, json_logs=config.json_logs)

    registry = default_registry
    try:
        added = apply_program_aliases(config, registry)
    except RegistrationError as e:
        logger.error(str(e))
        return EXIT_CONFIG_ERROR
    if added:
        logger.debug(f"Registered {added} program aliases from config")

    return args.handler(args, registry)


if __name__ == "__main__":
    sys.exit(main())
