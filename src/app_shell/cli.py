import argparse
import logging
import sys

import uvicorn

from src.adapters.auth.crypto import JWTAuthAdapter
from src.adapters.clock import SystemClock
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.adapters.sqlite.repos import SQLiteImageRepo, SQLiteSiteSettingsRepo, SQLiteUserRepo
from src.api.deps import Settings
from src.components.auth import CreateUserInput, run_create_user
from src.domain.entities import Role, SiteSettings
from src.domain.errors import StoreError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("cli")


def handle_init_db(settings: Settings, args: argparse.Namespace) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    applied = SQLiteMigrator(settings.db_path).run_migrations()
    print(f"Database {settings.db_path} ready ({len(applied)} migrations applied).")


def handle_create_user(settings: Settings, args: argparse.Namespace) -> None:
    inp = CreateUserInput(
        email=args.email,
        password=args.password,
        username=args.username or args.email.split("@")[0],
        name=args.name,
        surname=args.surname,
        role=Role.ADMIN if args.admin else Role.REGULAR,
    )
    result = run_create_user(
        inp, user_repo=SQLiteUserRepo(settings.db_path), auth_adapter=JWTAuthAdapter()
    )
    if not result.success or result.user is None:
        logger.error("Could not create %s: %s", args.email, result.error)
        sys.exit(1)
    print(f"Created user {result.user.id} ({result.user.email}).")


def handle_add_image(settings: Settings, args: argparse.Namespace) -> None:
    image = SQLiteImageRepo(settings.db_path).create(
        src=args.src, alt=args.alt or "", title=args.title or ""
    )
    print(f"Added image {image.id} ({image.src}).")


def handle_set_website_name(settings: Settings, args: argparse.Namespace) -> None:
    name = args.website_name.strip()
    if not name:
        logger.error("The name of website can not be empty!")
        sys.exit(1)
    SQLiteSiteSettingsRepo(settings.db_path).save(
        SiteSettings(website_name=name, updated_at=SystemClock().now_utc())
    )
    print(f"Website name set to {name!r}.")


def handle_serve(settings: Settings, args: argparse.Namespace) -> None:
    uvicorn.run("src.api.main:app", host=args.host, port=args.port, reload=args.reload)


def main() -> None:
    parser = argparse.ArgumentParser(description="CMSmall CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # init-db
    subparsers.add_parser("init-db", help="Create or migrate the database")

    # create-user
    user_parser = subparsers.add_parser("create-user", help="Create a user account")
    user_parser.add_argument("email")
    user_parser.add_argument("password")
    user_parser.add_argument("--username", help="Defaults to the local part of the email")
    user_parser.add_argument("--name", default="")
    user_parser.add_argument("--surname", default="")
    user_parser.add_argument("--admin", action="store_true", help="Grant the administrator role")

    # add-image
    image_parser = subparsers.add_parser("add-image", help="Register an image for content blocks")
    image_parser.add_argument("src", help="Image URL or path served by the frontend")
    image_parser.add_argument("--alt")
    image_parser.add_argument("--title")

    # set-website-name
    name_parser = subparsers.add_parser("set-website-name", help="Rename the website")
    name_parser.add_argument("website_name")

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the REST API")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=3001)
    serve_parser.add_argument("--reload", action="store_true")

    args = parser.parse_args()
    settings = Settings()

    handlers = {
        "init-db": handle_init_db,
        "create-user": handle_create_user,
        "add-image": handle_add_image,
        "set-website-name": handle_set_website_name,
        "serve": handle_serve,
    }
    try:
        handlers[args.command](settings, args)
    except StoreError as e:
        logger.error("Store error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
