#!/usr/bin/env python3
"""
Main Application Entry Point

Command-line interface for submitting invoices to the Verifactu API.
"""

import argparse
import sys

from verifactu import __version__
from verifactu.config.settings import get_settings
from verifactu.core.exceptions import EXIT_CODES, VerifactuError, get_exit_code
from verifactu.core.logging_config import configure_from_settings, get_logger
from verifactu.services.invoice_service import InvoiceService

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='verifactu-enviar',
        description='Submit invoices to the Spanish Verifactu API for tax compliance'
    )

    parser.add_argument(
        'invoice_file',
        help='JSON file containing the invoice data'
    )
    parser.add_argument(
        '-u', '--username',
        help='Verifactu username (default: $VERIFACTU_USERNAME)'
    )
    parser.add_argument(
        '-k', '--api-key',
        help='Verifactu API key (default: $VERIFACTU_API_KEY)'
    )
    parser.add_argument(
        '-o', '--output-dir',
        help='Directory for result files (default: $OUTPUT_DIR or ./resultats)'
    )
    parser.add_argument(
        '-b', '--base-url',
        help='Verifactu API base URL (default: $VERIFACTU_BASE_URL)'
    )
    parser.add_argument(
        '--timeout-ms',
        type=int,
        help='Request timeout in milliseconds (default: 30000)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f"%(prog)s {__version__}"
    )
    return parser


def run(argv=None) -> int:
    """
    Parse arguments, submit the invoice and return the exit code.

    Args:
        argv: Argument list (defaults to sys.argv)

    Returns:
        Process exit code
    """
    args = build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except VerifactuError as e:
        # logging is not configured yet; the last-resort handler prints to stderr
        logger.error(f"Invalid configuration: {str(e)}")
        return get_exit_code(e)
    configure_from_settings(settings, verbose=args.verbose)

    username = args.username or settings.username
    api_key = args.api_key or settings.api_key
    if not username or not api_key:
        logger.error("Username and API key are required")
        logger.error(
            "Use the --username and --api-key options or set the "
            "VERIFACTU_USERNAME and VERIFACTU_API_KEY environment variables"
        )
        return EXIT_CODES['VALIDATION_ERROR']

    config = settings.to_client_config(
        base_url=args.base_url,
        output_dir=args.output_dir,
        timeout_ms=args.timeout_ms
    )

    logger.info(f"Verifactu Invoice Sender v{__version__}")
    logger.info(f"Output directory: {config.output_dir}")
    logger.info(f"API base URL: {config.base_url}")
    logger.info(f"Username: {username}")
    logger.info(f"Invoice file: {args.invoice_file}")

    service = InvoiceService(config)
    try:
        service.process(username, api_key, args.invoice_file, verbose=args.verbose)
        return EXIT_CODES['SUCCESS']
    except Exception as e:
        return get_exit_code(e)
    finally:
        service.client.close()


def main():
    """Main entry point for the application."""
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        logger.info("Processing interrupted by user")
        sys.exit(EXIT_CODES['GENERAL_ERROR'])


if __name__ == '__main__':
    main()
