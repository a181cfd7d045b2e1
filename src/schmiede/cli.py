"""Command-line interface for schmiede."""

import argparse
import logging
import sys
from pathlib import Path

from schmiede.add.database import DatabaseFeature
from schmiede.config import Config, Database, DatabaseDriver
from schmiede.exceptions import ConfigError, GenerationError, SchmiedeError
from schmiede.generate.generator import Generator
from schmiede.generate.options import GenerateOption
from schmiede.schema.exporter import export_entity_file
from schmiede.schema.loader import load_entity
from schmiede.schema.models import Entity, parse_attribute_list
from schmiede.starter import DEFAULT_REPO_URL, Starter, create_project
from schmiede.types import CrudOperations, IDType


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schmiede",
        description="Scaffold and extend Rust web API projects",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="Create a project from a starter")
    init_parser.add_argument("project_name", help="Directory name of the new project")
    init_parser.add_argument(
        "--starter",
        choices=[s.value for s in Starter],
        default=Starter.AXUM.value,
    )
    init_parser.add_argument(
        "--repo",
        default=DEFAULT_REPO_URL,
        help="Repository containing the starters/ directory",
    )

    generate_parser = subparsers.add_parser(
        "generate", help="Generate code for an entity"
    )
    generate_parser.add_argument("--name", help="Entity name, e.g. BlogPost")
    generate_parser.add_argument(
        "--id", dest="id_type", help="Id column type (uuid, int, none)"
    )
    generate_parser.add_argument(
        "--options",
        required=True,
        help="Comma separated artifacts: sql, struct, routes, admin",
    )
    generate_parser.add_argument(
        "--attributes", help='Attribute list, e.g. "title:varChar(255),body:text?"'
    )
    generate_parser.add_argument(
        "--operations", help="CRUD operations: all, crud, c,r,u,d ..."
    )
    generate_parser.add_argument(
        "--schema-file", type=Path, help="Load the entity from a YAML file"
    )
    generate_parser.add_argument(
        "--save-schema", type=Path, help="Write the entity to a YAML file"
    )
    generate_parser.add_argument("--project-root", type=Path, default=Path("."))

    add_parser = subparsers.add_parser("add", help="Add a feature to the project")
    add_subparsers = add_parser.add_subparsers(dest="feature", required=True)
    database_parser = add_subparsers.add_parser(
        "database", help="Wire a database driver into the project"
    )
    database_parser.add_argument(
        "--driver", required=True, choices=[d.value for d in DatabaseDriver]
    )
    database_parser.add_argument(
        "--database",
        choices=[d.value for d in Database],
        default=Database.POSTGRES.value,
    )
    database_parser.add_argument("--project-root", type=Path, default=Path("."))

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s"
    )

    if args.command == "init":
        return cmd_init(args)
    elif args.command == "generate":
        return cmd_generate(args)
    elif args.command == "add" and args.feature == "database":
        return cmd_add_database(args)
    else:
        print(f"Command '{args.command}' not yet implemented", file=sys.stderr)
        return 1


def cmd_init(args: argparse.Namespace) -> int:
    """Create a new project from a starter."""
    try:
        target = create_project(
            args.project_name, starter=Starter(args.starter), repo_url=args.repo
        )
        print(f"Created project at {target}")
        return 0
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except SchmiedeError as e:
        print(f"Init error: {e}", file=sys.stderr)
        return 1


def entity_from_args(args: argparse.Namespace) -> Entity:
    """Build the entity from --schema-file, then apply any explicit flags."""
    if args.schema_file is not None:
        entity = load_entity(args.schema_file)
    elif args.name:
        entity = Entity(name=args.name)
    else:
        raise GenerationError("Either --name or --schema-file is required")

    if args.name:
        entity.name = args.name
    if args.id_type is not None:
        entity.id_type = IDType.parse(args.id_type)
    if args.attributes is not None:
        entity.attributes = parse_attribute_list(args.attributes)
    if args.operations is not None:
        entity.operations = CrudOperations.parse(args.operations)
    return entity


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate the selected artifacts for one entity."""
    try:
        options = GenerateOption.parse_list(args.options)
        entity = entity_from_args(args)
        config = Config.from_env(args.project_root)

        generator = Generator(args.project_root, config)
        written = generator.generate(entity, options)

        if args.save_schema is not None:
            written.append(export_entity_file(entity, args.save_schema))

        print(f"Generated {len(written)} file(s) for {entity.name}:")
        for path in written:
            print(f"  - {path}")
        return 0
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except SchmiedeError as e:
        print(f"Generation error: {e}", file=sys.stderr)
        return 1


def cmd_add_database(args: argparse.Namespace) -> int:
    """Wire a database driver into an existing project."""
    try:
        config = Config.load_or_default(args.project_root)
        feature = DatabaseFeature(
            DatabaseDriver(args.driver), database=Database(args.database)
        )
        touched = feature.add_feature(args.project_root, config)

        print(f"Added {args.driver} ({args.database}) to {args.project_root}:")
        for path in dict.fromkeys(touched):
            print(f"  - {path}")
        return 0
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except SchmiedeError as e:
        print(f"Add error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
