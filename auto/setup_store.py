#!/usr/bin/env python3
"""
Set Up Store Script.

Creates the blog document ``{"blogs": [], "users": []}`` in the configured
document store and adds the admin account. Useful for initial setup.

With ``DOCUMENT_STORE=jsonbin`` and no ``JSONBIN_BIN_ID``, a new private bin
is created and its id printed; put it in ``.env`` as ``JSONBIN_BIN_ID``.

Usage:
    uv run python auto/setup_store.py
    uv run python auto/setup_store.py --username admin --password Secret123
    uv run python auto/setup_store.py --reset

Environment Variables:
    ADMIN_USERNAME: Admin username (default: admin)
    ADMIN_PASSWORD: Admin password (prompted when absent)
"""

from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from asyncio import run as asyncio_run
from dataclasses import dataclass
from getpass import getpass
from os import environ
from sys import exit as sys_exit

from app.clients import JsonBinDocumentStore, build_document_store
from app.clients.protocols import DocumentStoreProtocol
from app.configs import Settings, get_settings
from app.errors import DocumentStoreError
from app.managers.password_manager import hash_password
from app.schemas import Document, UserAccount


@dataclass(frozen=True)
class AdminUserData:
    """
    Admin account creation data.

    Attributes
    ----------
    username : str
        Admin username.
    password : str
        Admin password (will be hashed).
    """

    username: str
    password: str


def parse_args(argv: list[str] | None = None) -> Namespace:
    parser = ArgumentParser(
        description="Initialise the blog document store and add the admin account.",
        formatter_class=RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--username", default=environ.get("ADMIN_USERNAME", "admin"))
    parser.add_argument("--password", default=environ.get("ADMIN_PASSWORD"))
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Start from an empty document even if one already exists",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Replace the password when the admin account already exists",
    )
    return parser.parse_args(argv)


def collect_admin(args: Namespace) -> AdminUserData:
    password = args.password or getpass("Admin password: ")
    if not password:
        mssg = "A password is required"
        raise ValueError(mssg)
    return AdminUserData(username=args.username, password=password)


async def upsert_admin(document: Document, admin: AdminUserData, *, force: bool) -> bool:
    """
    Add the admin account, or replace its password when ``force`` is set.

    Returns:
        bool: True if the document changed
    """
    existing = document.find_user(admin.username)
    if existing is not None and not force:
        print(f"User '{admin.username}' already exists, leaving it unchanged")
        return False

    hashed = await hash_password(admin.password)
    if existing is not None:
        existing.password = hashed
        print(f"Password for '{admin.username}' replaced")
        return True

    document.users.append(
        UserAccount(
            id=document.next_user_id(),
            username=admin.username,
            password=hashed,
            role="admin",
        ),
    )
    print(f"Admin '{admin.username}' added")
    return True


async def setup_store(
    store: DocumentStoreProtocol,
    admin: AdminUserData,
    *,
    reset: bool = False,
    force: bool = False,
) -> Document:
    """Create or update the stored document and return what was written."""
    if isinstance(store, JsonBinDocumentStore) and not store.bin_id:
        document = Document()
        await upsert_admin(document, admin, force=force)
        bin_id = await store.initialize(document)
        print(f"Created bin: {bin_id}")
        print("Set JSONBIN_BIN_ID in your .env to this value.")
        return document

    document = Document() if reset else await store.load()
    changed = await upsert_admin(document, admin, force=force)
    if changed or reset:
        await store.save(document)
        print(f"Document written to the {store.name} store")
    return document


async def main(argv: list[str] | None = None, settings: Settings | None = None) -> int:
    """
    Run the setup process.

    Returns
    -------
    int
        Process exit code.
    """
    args = parse_args(argv)
    settings = settings or get_settings()
    store = build_document_store(settings)

    try:
        admin = collect_admin(args)
        await setup_store(store, admin, reset=args.reset, force=args.force)
    except (DocumentStoreError, ValueError) as e:
        print(f"Setup failed: {e}")
        return 1
    finally:
        await store.close()

    return 0


if __name__ == "__main__":
    sys_exit(asyncio_run(main()))
