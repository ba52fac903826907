"""Command-line driver for registry actions.

The CLI wires :class:`RegistryActionCoordinator` to terminal adapters so the
same confirm, invoke, navigate and notify flow a UI would run can be
exercised from a shell. The backend is selected with
``HARBOURMASTER_BACKEND`` (``memory`` or ``http``).
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import typing as typ

import msgspec

from harbourmaster.backend.factory import create_registry_backend
from harbourmaster.backend.wire import REPOSITORY_SCOPES
from harbourmaster.console import ConsoleNotifier, ConsolePrompt, ConsoleRouter
from harbourmaster.logging import configure_logging, get_logger, log_info, log_warning
from harbourmaster.registry import (
    AccountContext,
    Failed,
    InvalidRepositoryNameError,
    OwnershipClassifier,
    RegistryActionCoordinator,
    RegistryBackendError,
    RegistryConfigError,
    Repository,
)
from harbourmaster.registry.actions import DELETE_IMAGE_CONFIRM

if typ.TYPE_CHECKING:
    from harbourmaster.backend import HttpRegistryBackend, InMemoryRegistryBackend
    from harbourmaster.registry import (
        ActionOutcome,
        ConfirmationPrompt,
        RegistryInventory,
    )

    Backend = InMemoryRegistryBackend | HttpRegistryBackend

logger = get_logger(__name__)

_EXIT_OK = 0
_EXIT_FAILED = 1
_EXIT_CONFIG = 2

_INVENTORY_COMMANDS = frozenset(
    {
        "list-catalogs",
        "get-catalog",
        "list-repositories",
        "list-tags",
        "delete-manifest",
    }
)


def _json_object(raw: str) -> dict[str, typ.Any]:
    try:
        return msgspec.json.decode(raw, type=dict[str, typ.Any])
    except msgspec.DecodeError as exc:
        msg = f"expected a JSON object: {exc}"
        raise argparse.ArgumentTypeError(msg) from exc


def _catalog_id(raw: str) -> int | str:
    return int(raw) if raw.isdigit() else raw


def _repository(raw: str) -> Repository:
    try:
        return Repository.parse(raw)
    except InvalidRepositoryNameError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``harbourmaster`` command."""
    parser = argparse.ArgumentParser(prog="harbourmaster", description=__doc__)
    parser.add_argument(
        "--account",
        default=None,
        help="Current account id (default: HARBOURMASTER_ACCOUNT_ID)",
    )
    parser.add_argument(
        "--yes",
        action="store_true",
        help="Accept confirmation prompts without asking",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level (default: HARBOURMASTER_LOG_LEVEL or INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    classify = commands.add_parser("classify", help="Classify a repository name")
    classify.add_argument("repository", help="Repository as namespace/image")

    delete_image = commands.add_parser(
        "delete-image", help="Confirm and open a repository for deletion"
    )
    delete_image.add_argument("repository", help="Repository as namespace/image")
    delete_image.add_argument("tag", nargs="?", default=None, help="Image tag")

    for name, help_text in (
        ("publish", "Make an image public"),
        ("hide", "Make an image private"),
    ):
        visibility = commands.add_parser(name, help=help_text)
        visibility.add_argument("namespace")
        visibility.add_argument("image")

    create = commands.add_parser("create-catalog", help="Create a catalog")
    create.add_argument("--data", type=_json_object, required=True, help="JSON object")

    update = commands.add_parser("update-catalog", help="Update a catalog")
    update.add_argument("catalog_id", type=_catalog_id)
    update.add_argument("--data", type=_json_object, required=True, help="JSON object")

    delete = commands.add_parser("delete-catalog", help="Confirm and delete a catalog")
    delete.add_argument("catalog_id", type=_catalog_id)

    commands.add_parser("list-catalogs", help="List catalogs as JSON")

    get_catalog = commands.add_parser("get-catalog", help="Show one catalog as JSON")
    get_catalog.add_argument("catalog_id", type=_catalog_id)

    repositories = commands.add_parser(
        "list-repositories", help="List repositories as JSON"
    )
    repositories.add_argument("scope", choices=sorted(REPOSITORY_SCOPES))
    repositories.add_argument("--keywords", default=None)

    tags = commands.add_parser("list-tags", help="List a repository's tags as JSON")
    tags.add_argument("repository", type=_repository, help="namespace/image")

    manifest = commands.add_parser(
        "delete-manifest", help="Confirm and delete a manifest by tag or digest"
    )
    manifest.add_argument("repository", type=_repository, help="namespace/image")
    manifest.add_argument("reference", help="Tag or digest")
    return parser


def _classify(account: AccountContext, repository: str) -> int:
    classifier = OwnershipClassifier(account)
    report = {
        "repository": repository,
        "visibility": classifier.visibility(repository).value,
        "mine": classifier.is_mine(repository),
    }
    print(msgspec.json.encode(report).decode())
    return _EXIT_OK


def _dispatch(
    coordinator: RegistryActionCoordinator, args: argparse.Namespace
) -> asyncio.Task[ActionOutcome]:
    match args.command:
        case "delete-image":
            return coordinator.delete_image(args.repository, args.tag)
        case "publish":
            return coordinator.public_image(args.namespace, args.image)
        case "hide":
            return coordinator.hide_image(args.namespace, args.image)
        case "create-catalog":
            return coordinator.create_catalog(args.data, form={})
        case "update-catalog":
            return coordinator.update_catalog(args.catalog_id, args.data)
        case "delete-catalog":
            return coordinator.delete_catalog(args.catalog_id)
    msg = f"Unknown command: {args.command}"
    raise ValueError(msg)


async def _query(backend: RegistryInventory, args: argparse.Namespace) -> object:
    match args.command:
        case "list-catalogs":
            return await backend.list_catalogs()
        case "get-catalog":
            return await backend.get_catalog(args.catalog_id)
        case "list-repositories":
            return await backend.list_repositories(args.scope, keywords=args.keywords)
        case "list-tags":
            repository = args.repository
            return await backend.list_tags(repository.namespace, repository.image_name)
    msg = f"Unknown command: {args.command}"
    raise ValueError(msg)


async def _inventory(
    backend: RegistryInventory,
    prompt: ConfirmationPrompt,
    args: argparse.Namespace,
) -> int:
    try:
        if args.command == "delete-manifest":
            if not await prompt.open(DELETE_IMAGE_CONFIRM, None):
                log_info(logger, "%s declined", DELETE_IMAGE_CONFIRM)
                return _EXIT_OK
            repository = args.repository
            result = await backend.delete_manifest(
                repository.namespace, repository.image_name, args.reference
            )
        else:
            result = await _query(backend, args)
    except RegistryBackendError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return _EXIT_FAILED
    print(msgspec.json.format(msgspec.json.encode(result)).decode())
    return _EXIT_OK


async def _run(
    backend: Backend,
    account: AccountContext,
    args: argparse.Namespace,
) -> int:
    prompt = ConsolePrompt(assume_yes=args.yes)
    try:
        if args.command in _INVENTORY_COMMANDS:
            return await _inventory(backend, prompt, args)

        coordinator = RegistryActionCoordinator(
            backend=backend,
            prompt=prompt,
            router=ConsoleRouter(),
            notifier=ConsoleNotifier(),
            account=account,
        )
        outcome = await _dispatch(coordinator, args)
        await coordinator.drain()
    finally:
        aclose = getattr(backend, "aclose", None)
        if aclose is not None:
            await aclose()

    if isinstance(outcome, Failed):
        print(f"error: {outcome.error}", file=sys.stderr)
        return _EXIT_FAILED
    return _EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Run a registry action from the command line.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success or decline, 1 when the backend call failed,
        2 on configuration errors.

    """
    args = build_parser().parse_args(argv)
    level, invalid = configure_logging(args.log_level)
    if invalid and args.log_level is not None:
        log_warning(logger, "Unknown log level %r; using %s", args.log_level, level)

    if args.account:
        account = AccountContext(args.account)
    else:
        account = AccountContext.from_env()
    if args.command == "classify":
        return _classify(account, args.repository)

    try:
        backend = create_registry_backend(account)
    except RegistryConfigError as exc:
        print(f"configuration error: {exc}", file=sys.stderr)
        return _EXIT_CONFIG

    return asyncio.run(_run(backend, account, args))


if __name__ == "__main__":
    raise SystemExit(main())
