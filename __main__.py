"""
Entry point for LocalAuth application.
This module provides a command-line interface to the local auth front end.
"""

import argparse

from LocalAuth.config import config
from LocalAuth.core.logging import auto_configure
from LocalAuth.start import client, list_users, whoami, logout


def parse(argv=None):
    # Initialize argument parser for command line interface
    parser = argparse.ArgumentParser(prog='LocalAuth', description='LocalAuth starter')
    parser.add_argument('--store', default=config.STORE_FILE,
                        help=f'JSON store file (default: {config.STORE_FILE})')
    parser.add_argument('--env', default=None,
                        choices=['development', 'production', 'testing'],
                        help=f'Logging profile (default: {config.INTERACTIVE_ENV} for run, otherwise {config.ENV})')
    subparsers = parser.add_subparsers(dest='command', required=True, help='Available commands')

    subparsers.add_parser('run', help='Start the interactive login screen')
    subparsers.add_parser('users', help='List registered accounts')
    subparsers.add_parser('whoami', help='Show the logged-in account')
    subparsers.add_parser('logout', help='Clear the logged-in account')

    return parser.parse_args(argv)


def main(argv=None):
    args = parse(argv)
    auto_configure(config.logging_env(args.command, args.env))

    match args.command:
        case 'run':
            client(store_path=args.store)
        case 'users':
            list_users(store_path=args.store)
        case 'whoami':
            whoami(store_path=args.store)
        case 'logout':
            logout(store_path=args.store)


if __name__ == '__main__':
    main()
