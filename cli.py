"""
Command-Line Interface for GraphQL Mocks

Provides commands for:
- query: Run a query against a mocked schema
- sample: Run a query many times and export the results
- serve: Serve a mocked schema over HTTP
- config: Manage configurations
"""

import argparse
import sys
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn
from rich.panel import Panel

# Import our modules
from graphql_mocks.config import Config, ConfigLoader, ConfigValidator, build_mocks, get_default_config
from graphql_mocks.server import MockServer, mock_server
from graphql_mocks.utils import FileHandler, setup_logging, read_schema, write_results

# Setup console
console = Console()


def read_query(value: str) -> str:
    """Query text given inline or as a path to a .graphql file"""
    path = Path(value)
    if path.suffix in ('.graphql', '.gql') and path.exists():
        return path.read_text()
    return value


class CLI:
    """Main CLI class"""

    def __init__(self):
        self.parser = self._create_parser()
        self.config_loader = ConfigLoader()

    def _create_parser(self) -> argparse.ArgumentParser:
        """Create argument parser"""
        parser = argparse.ArgumentParser(
            description="GraphQL Mocks CLI",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
  # Run a query against a mocked schema
  python cli.py query schema.graphql '{ users { id name } }'

  # Export 100 mocked results
  python cli.py sample schema.graphql query.graphql users.csv --count 100

  # Serve the mocked schema over HTTP
  python cli.py serve schema.graphql --port 8000

  # Use a configuration file with constant mocks
  python cli.py query schema.graphql query.graphql --config mocks.yaml
            """
        )

        parser.add_argument(
            '--verbose', '-v',
            action='store_true',
            help='Enable verbose output'
        )

        subparsers = parser.add_subparsers(dest='command', help='Available commands')

        # Query command
        query_parser = subparsers.add_parser('query', help='Run a query against a mocked schema')
        query_parser.add_argument('schema', help='Schema SDL file')
        query_parser.add_argument('query', help='Query text or .graphql file')
        query_parser.add_argument('--variables', help='Variables as JSON text or a .json file')
        query_parser.add_argument('--operation', help='Operation name')
        query_parser.add_argument('--config', '-c', help='Configuration file')
        query_parser.add_argument('--extended-scalars', action='store_true', help='Mock common custom scalars')
        query_parser.add_argument('--preserve', action='store_true', help='Keep resolvers already on the schema')

        # Sample command
        sample_parser = subparsers.add_parser('sample', help='Run a query repeatedly and export the results')
        sample_parser.add_argument('schema', help='Schema SDL file')
        sample_parser.add_argument('query', help='Query text or .graphql file')
        sample_parser.add_argument('output', help='Output file (.csv, .json, .parquet)')
        sample_parser.add_argument('--count', '-n', type=int, default=10, help='Number of results')
        sample_parser.add_argument('--variables', help='Variables as JSON text or a .json file')
        sample_parser.add_argument('--config', '-c', help='Configuration file')
        sample_parser.add_argument('--extended-scalars', action='store_true', help='Mock common custom scalars')
        sample_parser.add_argument('--preserve', action='store_true', help='Keep resolvers already on the schema')

        # Serve command
        serve_parser = subparsers.add_parser('serve', help='Serve a mocked schema over HTTP')
        serve_parser.add_argument('schema', help='Schema SDL file')
        serve_parser.add_argument('--host', help='Bind host')
        serve_parser.add_argument('--port', '-p', type=int, help='Bind port')
        serve_parser.add_argument('--config', '-c', help='Configuration file')

        # Config command
        config_parser = subparsers.add_parser('config', help='Manage configurations')
        config_subparsers = config_parser.add_subparsers(dest='config_command')

        show_parser = config_subparsers.add_parser('show', help='Show a configuration file')
        show_parser.add_argument('file', help='Configuration file')

        create_parser = config_subparsers.add_parser('create', help='Create a default configuration')
        create_parser.add_argument('output', help='Output configuration file')

        return parser

    def run(self, args=None):
        """Run CLI"""
        args = self.parser.parse_args(args)

        log_level = logging.DEBUG if args.verbose else logging.WARNING
        setup_logging(level=log_level)

        if args.command == 'query':
            self.cmd_query(args)
        elif args.command == 'sample':
            self.cmd_sample(args)
        elif args.command == 'serve':
            self.cmd_serve(args)
        elif args.command == 'config':
            self.cmd_config(args)
        else:
            self.parser.print_help()

    def _load_config(self, path: Optional[str]) -> Config:
        if not path:
            return get_default_config()

        config = self.config_loader.load_from_file(path)
        is_valid, errors = ConfigValidator.validate(config)
        if not is_valid:
            raise ValueError("Invalid configuration: " + "; ".join(errors))
        return config

    def _build_server(self, args) -> MockServer:
        config = self._load_config(args.config)
        return mock_server(
            read_schema(args.schema),
            mocks=build_mocks(config),
            preserve_resolvers=config.mocking.preserve_resolvers or args.preserve,
            extended_scalars=config.mocking.extended_scalars or args.extended_scalars,
        )

    def cmd_query(self, args):
        """Run one query and print the result"""
        try:
            server = self._build_server(args)
            variables = FileHandler.read_variables(args.variables)
            result = server.query(read_query(args.query), variables, args.operation)

            output: Dict[str, Any] = {"data": result.data}
            if result.errors:
                output["errors"] = [error.formatted for error in result.errors]

            console.print_json(json.dumps(output, default=str))

            if result.errors:
                sys.exit(1)

        except Exception as e:
            console.print(f"[bold red]✗ Error:[/bold red] {str(e)}")
            if args.verbose:
                console.print_exception()
            sys.exit(1)

    def cmd_sample(self, args):
        """Run a query repeatedly and write the results"""
        console.print(Panel.fit(
            "🎲 [bold]Mock Sampling[/bold]",
            border_style="blue"
        ))

        try:
            if args.count <= 0:
                raise ValueError("--count must be positive")

            server = self._build_server(args)
            variables = FileHandler.read_variables(args.variables)
            query = read_query(args.query)

            results: List[Dict[str, Any]] = []
            num_errors = 0

            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
                console=console
            ) as progress:
                task = progress.add_task("Running query...", total=args.count)

                for _ in range(args.count):
                    result = server.query(query, variables)
                    if result.errors:
                        num_errors += 1
                    if result.data is not None:
                        results.append(result.data)
                    progress.advance(task)

            data = write_results(results, args.output)
            console.print(f"✓ Saved mocked results to: {args.output}")

            table = Table(title="Sampling Summary", show_header=True)
            table.add_column("Metric", style="cyan")
            table.add_column("Value", style="green")

            table.add_row("Results", f"{len(data):,}")
            table.add_row("Columns", str(len(data.columns)))
            table.add_row("Results With Errors", str(num_errors))
            table.add_row("Output File", args.output)

            console.print(table)

        except Exception as e:
            console.print(f"[bold red]✗ Error:[/bold red] {str(e)}")
            if args.verbose:
                console.print_exception()
            sys.exit(1)

    def cmd_serve(self, args):
        """Serve the mocked schema over HTTP"""
        import uvicorn
        from api import create_app

        try:
            config = self._load_config(args.config)
            setup_logging(
                level=logging.DEBUG if args.verbose else config.logging.level,
                log_file=config.logging.log_file
            )
            if args.host:
                config.server.host = args.host
            if args.port:
                config.server.port = args.port

            app = create_app(read_schema(args.schema), config)

            console.print(Panel.fit(
                f"🚀 [bold]Serving mocks on http://{config.server.host}:{config.server.port}/graphql[/bold]",
                border_style="green"
            ))
            uvicorn.run(app, host=config.server.host, port=config.server.port)

        except Exception as e:
            console.print(f"[bold red]✗ Error:[/bold red] {str(e)}")
            if args.verbose:
                console.print_exception()
            sys.exit(1)

    def cmd_config(self, args):
        """Manage configurations"""
        try:
            if args.config_command == 'show':
                config = self.config_loader.load_from_file(args.file)
                is_valid, errors = ConfigValidator.validate(config)

                console.print(f"\n[bold]Configuration: {args.file}[/bold]\n")
                console.print_json(data=config.to_dict())

                if not is_valid:
                    for error in errors:
                        console.print(f"[bold red]✗[/bold red] {error}")
                    sys.exit(1)

            elif args.config_command == 'create':
                config = get_default_config()
                self.config_loader.save_config(config, args.output)

                console.print(f"✓ Created configuration file: {args.output}")
                console.print("  Edit this file to customize settings")

            else:
                console.print("Use 'config show <file>' or 'config create <file>'")

        except Exception as e:
            console.print(f"[bold red]✗ Error:[/bold red] {str(e)}")
            if args.verbose:
                console.print_exception()
            sys.exit(1)


def main():
    """CLI entry point"""
    cli = CLI()
    cli.run()


if __name__ == "__main__":
    main()
