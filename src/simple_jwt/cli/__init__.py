"""simple-jwt CLI: secret and key generation, token inspection."""

import argparse
import json
import sys

import jwt

from simple_jwt.config import MIN_SECRET_LENGTH, TokenAlgorithm
from simple_jwt.core.keys import generate_key_pair
from simple_jwt.core.secret import create_secret


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``simple-jwt`` console script."""
    parser = argparse.ArgumentParser(prog="simple-jwt", description="Simple JWT CLI")
    sub = parser.add_subparsers(dest="command")

    secret_cmd = sub.add_parser("secret", help="Generate a random HMAC secret")
    secret_cmd.add_argument(
        "--length",
        type=int,
        default=MIN_SECRET_LENGTH,
        help=f"Number of characters (minimum {MIN_SECRET_LENGTH})",
    )
    secret_cmd.add_argument("--no-uppercase", action="store_true")
    secret_cmd.add_argument("--no-lowercase", action="store_true")
    secret_cmd.add_argument("--no-digits", action="store_true")

    keypair_cmd = sub.add_parser("keypair", help="Generate a PEM key pair for RS*/ES* algorithms")
    keypair_cmd.add_argument(
        "--algorithm",
        default=TokenAlgorithm.RS256.value,
        choices=[a.value for a in TokenAlgorithm if not a.is_hmac],
    )

    inspect_cmd = sub.add_parser(
        "inspect", help="Print a token's header and claims WITHOUT verifying it",
    )
    inspect_cmd.add_argument("token")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "secret":
        try:
            print(
                create_secret(
                    args.length,
                    uppercase=not args.no_uppercase,
                    lowercase=not args.no_lowercase,
                    digits=not args.no_digits,
                )
            )
        except ValueError as e:
            parser.error(str(e))
    elif args.command == "keypair":
        private_pem, public_pem = generate_key_pair(args.algorithm)
        print(private_pem, end="")
        print(public_pem, end="")
    elif args.command == "inspect":
        _inspect(args.token)


def _inspect(token: str) -> None:
    try:
        header = jwt.get_unverified_header(token)
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError as e:
        print(f"Malformed token: {e}", file=sys.stderr)
        sys.exit(2)
    print(json.dumps({"header": header, "claims": claims}, indent=2, sort_keys=True))
