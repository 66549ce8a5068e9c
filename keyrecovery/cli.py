"""
Command line interface.
Generate key pairs, split them into share files and recover them back.

Threshold, share count and authenticated mode default to the
KEYRECOVERY_* environment settings (see keyrecovery.config).
"""

import argparse
import json
import logging
import sys

from keyrecovery.config import RecoveryConfig
from keyrecovery.errors import DecodeError, KeyRecoveryError
from keyrecovery.field import random_keys
from keyrecovery.recover import recover
from keyrecovery.share import Share
from keyrecovery.split import split

logger = logging.getLogger("keyrecovery")


def read_shares(path: str) -> list[Share]:
    with open(path, "r") as file:
        data = json.load(file)
    if not isinstance(data, list):
        raise DecodeError(f"{path}: expected a JSON list of shares")
    return [Share.from_dict(item) for item in data]


def write_shares(path: str, shares: list[Share]) -> None:
    with open(path, "w") as file:
        json.dump([share.to_dict() for share in shares], file, indent=2)


def apply_config(args: argparse.Namespace, config: RecoveryConfig) -> None:
    """Fill in options left unset on the command line."""
    if args.threshold is None:
        args.threshold = config.threshold
    if getattr(args, "num_shares", 0) is None:
        args.num_shares = config.num_shares
    if getattr(args, "authenticated", None) is False:
        args.authenticated = config.authenticated


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Threshold splitting and recovery of spending/viewing key pairs")
    parser.add_argument("-v", "--verbose", action="store_true", help="log progress to stderr")

    subparsers = parser.add_subparsers(dest="command", required=True, help="sub-command")

    subparsers.add_parser("keygen", help="generate a random key pair", description="Print a random spending/viewing key pair as JSON.")

    parser_split = subparsers.add_parser("split", help="split a key pair into shares", description="Split a spending/viewing key pair into shares and write them as JSON.")
    parser_split.add_argument("-t", "--threshold", type=int, default=None, help="shares needed to recover (default: $KEYRECOVERY_THRESHOLD or 14)")
    parser_split.add_argument("-n", "--num-shares", type=int, default=None, help="shares to generate (default: $KEYRECOVERY_NUM_SHARES or 20)")
    parser_split.add_argument("-s", "--spending", type=str, required=True, help="spending key, lowercase hex without 0x")
    parser_split.add_argument("-w", "--viewing", type=str, required=True, help="viewing key, lowercase hex without 0x")
    parser_split.add_argument("-o", "--output", type=str, default=None, help="path to write the shares to (default: stdout)")

    parser_recover = subparsers.add_parser("recover", help="recover a key pair from shares", description="Recover a spending/viewing key pair from a JSON file of shares.")
    parser_recover.add_argument("file", type=str, help="path to read the shares from")
    parser_recover.add_argument("-t", "--threshold", type=int, default=None, help="threshold used when splitting (default: $KEYRECOVERY_THRESHOLD or 14)")
    parser_recover.add_argument("-a", "--authenticated", action="store_true", help="require at least threshold+1 shares so tampering is detected (default: $KEYRECOVERY_AUTHENTICATED)")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "keygen":
            spending, viewing = random_keys()
            print(json.dumps({"spending": spending, "viewing": viewing}, indent=2))

        elif args.command == "split":
            apply_config(args, RecoveryConfig.from_env())
            shares = split(args.threshold, args.num_shares, args.spending, args.viewing)
            logger.info("split key pair into %d shares, threshold %d", len(shares), args.threshold)
            if args.output is None:
                print(json.dumps([share.to_dict() for share in shares], indent=2))
            else:
                write_shares(args.output, shares)
                logger.info("wrote shares to %s", args.output)

        elif args.command == "recover":
            apply_config(args, RecoveryConfig.from_env())
            shares = read_shares(args.file)
            logger.info("read %d shares from %s", len(shares), args.file)
            spending, viewing = recover(args.threshold, shares, authenticated=args.authenticated)
            print(json.dumps({"spending": spending, "viewing": viewing}, indent=2))

    except KeyRecoveryError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except (OSError, json.JSONDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
