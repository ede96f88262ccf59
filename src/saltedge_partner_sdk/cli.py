"""
Command-line interface for Salt Edge Partner SDK
Provides key generation, request signing and read/write access to the
partner endpoints
"""

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional

from .version import __version__
from .config import SaltedgeSettings
from .crypto import generate_key_pair
from .exceptions import SaltedgePartnerError
from .http_client import SaltedgePartnerClient
from .result import SaltedgeError
from .signing import LocalKeySigner, build_canonical_message, create_signature_headers


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog='saltedge-partner',
        description='Salt Edge Partners API command-line interface'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'Salt Edge Partner SDK {__version__}'
    )

    parser.add_argument(
        '--settings',
        help='JSON settings file (default: SALTEDGE_* environment variables)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    setup_keygen_parser(subparsers)
    setup_sign_parser(subparsers)
    setup_providers_parser(subparsers)
    setup_templates_parser(subparsers)
    setup_leads_parser(subparsers)

    return parser


def _flag(parser, name: str, help_text: str) -> None:
    """Boolean query flag that is omitted unless given."""
    parser.add_argument(name, action='store_const', const=True, default=None, help=help_text)


def setup_keygen_parser(subparsers):
    """Setup key generation subcommand."""
    keygen_parser = subparsers.add_parser('keygen', help='Generate an RSA key pair for request signing')
    keygen_parser.add_argument('--key-size', type=int, default=2048, help='Key size in bits (default: 2048)')
    keygen_parser.add_argument('--passphrase', help='Encrypt the private key with this passphrase')
    keygen_parser.add_argument('--private-key-out', help='Write the private key to this file')
    keygen_parser.add_argument('--public-key-out', help='Write the public key to this file')


def setup_sign_parser(subparsers):
    """Setup signing subcommand."""
    sign_parser = subparsers.add_parser('sign', help='Compute signature headers for a request')
    sign_parser.add_argument('--method', default='GET', help='HTTP method (default: GET)')
    sign_parser.add_argument('--url', required=True, help='Absolute request URL')
    sign_parser.add_argument('--body', help='JSON request body')
    sign_parser.add_argument('--private-key', required=True, help='PEM private key file')
    sign_parser.add_argument('--passphrase', help='Private key passphrase')
    sign_parser.add_argument('--timestamp-ms', type=int, help='Signing time in milliseconds (default: now)')


def setup_providers_parser(subparsers):
    """Setup providers subcommands."""
    providers_parser = subparsers.add_parser('providers', help='Provider operations')
    providers_subparsers = providers_parser.add_subparsers(dest='providers_command')

    list_parser = providers_subparsers.add_parser('list', help='List providers')
    list_parser.add_argument('--from-id', help='Pagination cursor')
    list_parser.add_argument('--from-date', help='Updated since (YYYY-MM-DD)')
    list_parser.add_argument('--country-code', help='ISO 3166-1 alpha-2 country code')
    list_parser.add_argument('--mode', choices=['oauth', 'web', 'api', 'file'], help='Provider mode')
    _flag(list_parser, '--include-fake-providers', 'Include sandbox providers')
    _flag(list_parser, '--include-payments-fields', 'Include payment fields')
    list_parser.add_argument('--all', action='store_true', help='Follow pagination to the end')

    show_parser = providers_subparsers.add_parser('show', help='Show a provider')
    show_parser.add_argument('provider_code', help='Provider code')
    _flag(show_parser, '--include-payments-fields', 'Include payment fields')


def setup_templates_parser(subparsers):
    """Setup payment templates subcommands."""
    templates_parser = subparsers.add_parser('templates', help='Payment template operations')
    templates_subparsers = templates_parser.add_subparsers(dest='templates_command')

    list_parser = templates_subparsers.add_parser('list', help='List payment templates')
    list_parser.add_argument('--from-id', help='Pagination cursor')
    _flag(list_parser, '--deprecated', 'Only deprecated templates')
    list_parser.add_argument('--all', action='store_true', help='Follow pagination to the end')

    show_parser = templates_subparsers.add_parser('show', help='Show a payment template')
    show_parser.add_argument('template_identifier', help='Template identifier, e.g. SEPA')


def setup_leads_parser(subparsers):
    """Setup leads subcommands."""
    leads_parser = subparsers.add_parser('leads', help='Lead operations')
    leads_subparsers = leads_parser.add_subparsers(dest='leads_command')

    create_parser_ = leads_subparsers.add_parser('create', help='Create a lead')
    create_parser_.add_argument('--email', required=True, help='Lead email address')
    create_parser_.add_argument('--identifier', help='Additional identifier (IBAN, phone, ...)')
    create_parser_.add_argument('--kyc', help='KYC details as a JSON object')

    remove_parser = leads_subparsers.add_parser('remove', help='Remove a lead')
    remove_parser.add_argument('customer_id', help='Customer id of the lead')


def create_client(args) -> SaltedgePartnerClient:
    """Build a client from --settings or the environment."""
    if args.settings:
        settings = SaltedgeSettings.from_file(args.settings)
    else:
        settings = SaltedgeSettings.from_env()
    return settings.create_client()


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _report(result) -> int:
    """Print a Result and return the exit code."""
    if result.is_ok:
        output = {'data': result.value.data}
        if result.value.meta is not None:
            output['meta'] = asdict(result.value.meta)
        _print_json(output)
        return 0

    error = result.error
    if isinstance(error, SaltedgeError):
        print(f"API error ({error.status_code}): {error.error_class}: {error.error_message}", file=sys.stderr)
        _print_json({'error': error.to_dict()})
    else:
        print(f"Request failed: {type(error).__name__}: {error}", file=sys.stderr)
    return 1


def _parse_json_arg(value: Optional[str], name: str) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise SaltedgePartnerError(f"{name} is not valid JSON: {e}", "INVALID_ARGUMENT")


def handle_keygen_command(args) -> int:
    """Handle keygen command"""
    key_pair = generate_key_pair(args.key_size, args.passphrase)

    if args.private_key_out:
        Path(args.private_key_out).write_bytes(key_pair.private_pem)
        print(f"Private key written to: {args.private_key_out}")
    else:
        print(key_pair.private_pem.decode('ascii'))

    if args.public_key_out:
        Path(args.public_key_out).write_bytes(key_pair.public_pem)
        print(f"Public key written to: {args.public_key_out}")
    else:
        print(key_pair.public_pem.decode('ascii'))

    return 0


async def handle_sign_command(args) -> int:
    """Handle sign command"""
    signer = LocalKeySigner(Path(args.private_key).read_bytes(), args.passphrase)
    body = _parse_json_arg(args.body, '--body')

    headers = await create_signature_headers(signer, args.url, args.method, body, args.timestamp_ms)
    _print_json({
        'canonical_message': build_canonical_message(int(headers.expires_at), args.method, args.url, body),
        'headers': headers.as_headers(),
    })
    return 0


async def handle_providers_command(args) -> int:
    """Handle providers subcommands"""
    async with create_client(args) as client:
        if args.providers_command == 'list':
            params = dict(
                from_date=args.from_date,
                country_code=args.country_code,
                mode=args.mode,
                include_fake_providers=args.include_fake_providers,
                include_payments_fields=args.include_payments_fields,
            )
            if args.all:
                result = await client.providers.list_all(**params)
            else:
                result = await client.providers.list(from_id=args.from_id, **params)
        elif args.providers_command == 'show':
            result = await client.providers.show(args.provider_code, args.include_payments_fields)
        else:
            print("Error: No providers subcommand specified", file=sys.stderr)
            return 1
    return _report(result)


async def handle_templates_command(args) -> int:
    """Handle payment templates subcommands"""
    async with create_client(args) as client:
        if args.templates_command == 'list':
            if args.all:
                result = await client.payment_templates.list_all(deprecated=args.deprecated)
            else:
                result = await client.payment_templates.list(from_id=args.from_id, deprecated=args.deprecated)
        elif args.templates_command == 'show':
            result = await client.payment_templates.show(args.template_identifier)
        else:
            print("Error: No templates subcommand specified", file=sys.stderr)
            return 1
    return _report(result)


async def handle_leads_command(args) -> int:
    """Handle leads subcommands"""
    async with create_client(args) as client:
        if args.leads_command == 'create':
            kyc = _parse_json_arg(args.kyc, '--kyc')
            result = await client.leads.create(args.email, args.identifier, kyc)
        elif args.leads_command == 'remove':
            result = await client.leads.remove(args.customer_id)
        else:
            print("Error: No leads subcommand specified", file=sys.stderr)
            return 1
    return _report(result)


ASYNC_HANDLERS = {
    'sign': handle_sign_command,
    'providers': handle_providers_command,
    'templates': handle_templates_command,
    'leads': handle_leads_command,
}


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the CLI

    Args:
        argv: Command line arguments (None to use sys.argv)

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    try:
        if args.command == 'keygen':
            return handle_keygen_command(args)
        elif args.command in ASYNC_HANDLERS:
            return asyncio.run(ASYNC_HANDLERS[args.command](args))
        else:
            parser.print_help()
            return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130
    except SaltedgePartnerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
