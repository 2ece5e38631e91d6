"""
Storage services for the CMS.

Each Flask app owns one instance of every store, created by init_services()
and reached from request handlers through the get_* accessors.

Usage:
    from cms.services import get_document_store

    documents = get_document_store()
    names = documents.list()
"""
from flask import current_app

from cms.services.credential_store import CredentialStore
from cms.services.document_store import DocumentStore
from cms.services.version_ledger import VersionLedger

EXTENSION_KEY = 'cms'


def init_services(app) -> dict:
    """
    Create the stores from the app configuration.

    Args:
        app: Flask application instance

    Returns:
        Dictionary of the created stores
    """
    documents = DocumentStore(
        app.config['DATA_PATH'],
        app.config['ALLOWED_DOCUMENT_EXTENSIONS'],
        app.config.get('MARKDOWN_EXTENSIONS'),
    )
    services = {
        'documents': documents,
        'ledger': VersionLedger(
            documents,
            app.config['HISTORY_PATH'],
            app.config['HISTORY_LEDGER_FILE'],
        ),
        'credentials': CredentialStore(
            app.config['USERS_FILE'],
            rounds=app.config.get('BCRYPT_ROUNDS', 12),
        ),
    }
    app.extensions[EXTENSION_KEY] = services
    return services


def get_document_store() -> DocumentStore:
    return current_app.extensions[EXTENSION_KEY]['documents']


def get_version_ledger() -> VersionLedger:
    return current_app.extensions[EXTENSION_KEY]['ledger']


def get_credential_store() -> CredentialStore:
    return current_app.extensions[EXTENSION_KEY]['credentials']
