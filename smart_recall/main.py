"""Main entry point for the Smart Recall search service."""

import asyncio
import logging
import sys

from dotenv import load_dotenv

from smart_recall.config import get_settings
from smart_recall.knowledge import KnowledgeService
from smart_recall.query import QueryProcessor
from smart_recall.storage import create_store
from smart_recall.web_server import WebServer

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


async def main() -> None:
    """Main application entry point."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting Smart Recall in {settings.environment.value} mode")
    logger.info(f"Using LLM provider: {settings.llm_provider.value}")
    logger.info(f"Using storage backend: {settings.storage_backend.value}")

    # Validate configuration
    try:
        settings.validate_provider_config()
        settings.validate_storage_config()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    store = create_store(settings)
    processor = QueryProcessor(store=store, settings=settings)
    web_server = WebServer(
        processor=processor,
        knowledge=KnowledgeService(store),
        host=settings.server_host,
        port=settings.server_port,
    )
    runner = await web_server.start()

    try:
        await asyncio.Event().wait()
    finally:
        logger.info("Shutting down...")
        await web_server.stop(runner)
        if processor.llm_provider is not None:
            await processor.llm_provider.close()
        await store.close()


def run() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
