#!/usr/bin/env python
"""Script to register a CMS user from the command line."""
import argparse
import getpass
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cms import create_app
from cms.services import get_credential_store
from cms.services.credential_store import DuplicateUser
from cms.utils.validators import ValidationError


def main():
    parser = argparse.ArgumentParser(description='Register a user who can edit documents')
    parser.add_argument('username', help='Username to register')
    parser.add_argument('--password',
                        help='Password (prompted for when omitted)')
    parser.add_argument('--env', default=None,
                        help='Configuration name (development, production, testing)')
    args = parser.parse_args()

    password = args.password or getpass.getpass(f'Password for {args.username}: ')

    app = create_app(args.env)
    with app.app_context():
        try:
            user = get_credential_store().register(args.username, password)
        except (ValidationError, DuplicateUser) as e:
            print(f"Error: {e}")
            sys.exit(1)

        print(f"Registered {user.username} in {app.config['USERS_FILE']}")


if __name__ == '__main__':
    main()
