"""Entry point to the RAG chat REST API service.

This source file contains entry point to the service. It is implemented in the
main() function. Besides starting the service it can ingest news articles
into the vector index and inspect stored chat sessions.
"""

import asyncio
import os
from argparse import ArgumentParser, Namespace

from rich.console import Console
from rich.markup import escape
from rich.table import Table

import constants
from cache.session_store import SessionHistoryStore
from cache.store_factory import StoreFactory
from configuration import configuration
from errors import ConfigurationError, UpstreamUnavailableError
from log import configure_logging, get_logger
from models.config import Configuration
from runners.uvicorn import start_uvicorn
from services.embeddings import JinaEmbeddingProvider
from services.ingest import Ingestor, load_articles
from services.vector_index import QdrantVectorIndex
from utils.checks import InvalidConfigurationError

logger = get_logger(__name__)


def create_argument_parser() -> ArgumentParser:
    """Create and configure argument parser object."""
    parser = ArgumentParser()
    parser.add_argument(
        "-v",
        "--verbose",
        dest="verbose",
        help="make it verbose",
        action="store_true",
        default=False,
    )
    parser.add_argument(
        "-d",
        "--dump-configuration",
        dest="dump_configuration",
        help="dump actual configuration into JSON file and quit",
        action="store_true",
        default=False,
    )
    parser.add_argument(
        "-c",
        "--config",
        dest="config_file",
        help="path to configuration file (default: rag-chat.yaml)",
        default="rag-chat.yaml",
    )
    parser.add_argument(
        "--ingest",
        dest="ingest_file",
        metavar="FILE",
        help="embed articles from JSON file into the vector index and quit",
        default=None,
    )
    parser.add_argument(
        "--list-sessions",
        dest="list_sessions",
        help="list stored chat sessions and quit",
        action="store_true",
        default=False,
    )
    parser.add_argument(
        "--show-session",
        dest="show_session",
        metavar="ID",
        help="print history of one chat session and quit",
        default=None,
    )

    return parser


async def ingest_articles(config: Configuration, filename: str) -> int:
    """Embed articles from the file and store them in the vector index."""
    articles = load_articles(filename)
    logger.info("Found %d articles in %s", len(articles), filename)
    embeddings = JinaEmbeddingProvider(config.embedding)
    index = QdrantVectorIndex(config.vector_index)
    try:
        ingestor = Ingestor(embeddings, index, config.vector_index.dimension)
        return await ingestor.ingest(articles)
    finally:
        await embeddings.close()
        await index.close()


async def list_sessions(config: Configuration, console: Console) -> None:
    """Print a table of live chat sessions."""
    store = StoreFactory.key_value_store(config.cache)
    await store.connect()
    try:
        summaries = await SessionHistoryStore(store, config.sessions.ttl).list_sessions()
    finally:
        await store.close()

    if not summaries:
        console.print("No sessions found")
        return

    table = Table(title="Chat sessions")
    table.add_column("Session")
    table.add_column("Messages", justify="right")
    table.add_column("Expires in [s]", justify="right")
    table.add_column("Last message")
    for summary in summaries:
        table.add_row(
            summary.session_id,
            str(summary.message_count),
            "-" if summary.expires_in is None else str(summary.expires_in),
            summary.last_message or "",
        )
    console.print(table)


async def show_session(config: Configuration, session_id: str, console: Console) -> None:
    """Print history of one chat session."""
    store = StoreFactory.key_value_store(config.cache)
    await store.connect()
    try:
        history = await SessionHistoryStore(store, config.sessions.ttl).load(session_id)
    finally:
        await store.close()

    if not history:
        console.print(f"No history for session {session_id}")
        return
    for message in history:
        console.print(f"[bold]{message.role}[/bold]: {escape(message.content)}")


def run_command(args: Namespace) -> bool:
    """Run the one-shot command selected on command line.

    Returns:
        True when a command was run, False when the service should start.
    """
    config = configuration.configuration
    console = Console()

    if args.ingest_file:
        count = asyncio.run(ingest_articles(config, args.ingest_file))
        logger.info("Ingestion complete, %d articles stored", count)
        return True

    if args.list_sessions:
        asyncio.run(list_sessions(config, console))
        return True

    if args.show_session:
        asyncio.run(show_session(config, args.show_session, console))
        return True

    return False


def main() -> None:
    """Entry point to the web service."""
    parser = create_argument_parser()
    args = parser.parse_args()
    configure_logging(args.verbose)

    logger.info("RAG chat startup")
    configuration.load_configuration(args.config_file)
    logger.info("Configuration: %s", configuration.configuration)

    # -d or --dump-configuration CLI flags are used to dump the actual configuration
    # to a JSON file w/o doing any other operation
    if args.dump_configuration:
        try:
            configuration.configuration.dump()
            logger.info("Configuration dumped to configuration.json")
        except OSError as e:
            logger.error("Failed to dump configuration: %s", e)
            raise SystemExit(1) from e
        return

    try:
        if run_command(args):
            return
    except (
        ConfigurationError,
        InvalidConfigurationError,
        UpstreamUnavailableError,
    ) as e:
        logger.error("%s", e)
        raise SystemExit(1) from e

    # Store config path in env so each uvicorn worker can load it
    # (step is needed because process context isn't shared).
    os.environ[constants.CONFIG_PATH_ENV_VARIABLE] = args.config_file

    # if every previous steps don't fail, start the service on specified port
    start_uvicorn(configuration.service_configuration, args.verbose)
    logger.info("RAG chat finished")


if __name__ == "__main__":
    main()
