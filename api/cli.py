"""Command-line entry point: run the API or the one-shot vectorization job."""

import argparse
import asyncio
import sys

from dotenv import load_dotenv
from rich.console import Console

console = Console()


async def run_vectorize() -> int:
    """Embed every stored feedback record into the configured index."""
    from analytics.vectorize import VectorizeClient
    from analytics.workers_ai import WorkersAIClient
    from api.config import get_settings
    from api.db.database import SessionLocal, init_db
    from api.search.service import VectorizationService

    settings = get_settings()
    cloudflare = settings.cloudflare_config()
    init_db()

    db = SessionLocal()
    try:
        async with WorkersAIClient(cloudflare) as ai, VectorizeClient(cloudflare) as index:
            return await VectorizationService(db, ai, index).run()
    finally:
        db.close()


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Feedback Analytics - dashboard, semantic search and AI insights"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to .env file (default: .env)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")

    subparsers.add_parser("vectorize", help="Embed all feedback into the vector index")

    args = parser.parse_args(argv)

    try:
        # Must happen before settings are first read
        if args.config:
            load_dotenv(args.config, override=True)

        from analytics.logging_config import setup_logging
        from api.config import get_settings

        settings = get_settings()
        setup_logging(level=settings.log_level, log_file=settings.log_file)

        if args.command == "serve":
            import uvicorn

            console.print(f"\n[bold cyan]{settings.app_name}[/bold cyan] on http://{args.host}:{args.port}\n")
            uvicorn.run("api.main:app", host=args.host, port=args.port)
            return 0

        console.print(f"\n[bold cyan]Vectorizing feedback[/bold cyan]")
        console.print(f"Embedding model: [yellow]{settings.embedding_model}[/yellow]")
        console.print(f"Index: [yellow]{settings.vectorize_index}[/yellow]\n")

        with console.status("Embedding and upserting..."):
            vectorized = asyncio.run(run_vectorize())

        console.print(f"[bold green]✓ Vectorized {vectorized} records[/bold green]")
        return 0

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130

    except Exception as e:
        console.print(f"\n[bold red]Error:[/bold red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
