"""Repository secret commands."""

import argparse
import sys

from actions_cli.commands import Subparsers, add_repository_argument
from actions_cli.encryption import seal_secret
from actions_cli.github.client import GitHubActionsClient


async def list_secrets(client: GitHubActionsClient, args: argparse.Namespace) -> None:
    """Print the names of repository secrets."""
    secrets = client.secrets(args.repository)
    async for secret in secrets:
        print(secret.name)
    sys.stdout.flush()
    secrets.raise_for_failure()


async def show_public_key(
    client: GitHubActionsClient, args: argparse.Namespace
) -> None:
    """Print the public key used for creating secrets."""
    public_key = await client.public_key(args.repository)
    print(public_key.key)


async def create_secret(client: GitHubActionsClient, args: argparse.Namespace) -> None:
    """Encrypt a value for the repository key and store it as a secret."""
    public_key = await client.public_key(args.repository)
    encrypted_value = seal_secret(public_key.key, args.value)
    await client.upsert_secret(
        args.repository, args.name, encrypted_value, public_key.key_id
    )
    print(f"Secret {args.name} is stored")


async def delete_secret(client: GitHubActionsClient, args: argparse.Namespace) -> None:
    """Delete a repository secret."""
    await client.delete_secret(args.repository, args.name)
    print(f"Secret {args.name} is deleted")


def register(subparsers: Subparsers) -> None:
    parser = subparsers.add_parser("secrets", help="Interact with workflow secrets")
    commands = parser.add_subparsers(dest="command", required=True)

    list_parser = commands.add_parser("list", help="List repository secrets")
    add_repository_argument(list_parser)
    list_parser.set_defaults(handler=list_secrets)

    key_parser = commands.add_parser(
        "public-key", help="Get a public key used for creating secrets"
    )
    add_repository_argument(key_parser)
    key_parser.set_defaults(handler=show_public_key)

    create_parser = commands.add_parser("create", help="Create or update a secret")
    add_repository_argument(create_parser)
    create_parser.add_argument("-n", "--name", required=True, help="Secret name")
    create_parser.add_argument("-v", "--value", required=True, help="Secret value")
    create_parser.set_defaults(handler=create_secret)

    delete_parser = commands.add_parser("delete", help="Delete a secret")
    add_repository_argument(delete_parser)
    delete_parser.add_argument("name", help="Name of secret to delete")
    delete_parser.set_defaults(handler=delete_secret)
