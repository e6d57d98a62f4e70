"""
CLI entry point.

Commands:
- chat: Ask questions; recall from memory, search, review
- init: Create the data directory and the brain
- count: Show memory count and stored records

Flags:
- --debug: Enable debug logging to file
"""

import asyncio
import logging
import sys

from learning_agent.core.config import AgentConfig, Settings, get_settings, load_agent_config
from learning_agent.core.errors import ConfigurationError, StoreError
from learning_agent.core.logging import get_logger, setup_logging
from learning_agent.llm.litellm_adapter import LiteLLMAdapter, LiteLLMEmbedder
from learning_agent.memory.store import SQLiteMemoryStore

USAGE = """Usage: learning-agent [--debug] <command>
Commands: chat, init, count
Flags: --debug (enable debug logging to data/learning_agent.log)"""


def main() -> int:
    """Main entry point."""
    settings = get_settings()

    debug_mode = "--debug" in sys.argv
    if debug_mode:
        sys.argv.remove("--debug")

    # Always log to file; --debug enables verbose DEBUG level
    log_level = logging.DEBUG if debug_mode else logging.INFO
    log_file = settings.data_dir / "learning_agent.log"
    setup_logging(level=log_level, log_file=log_file)
    logger = get_logger("cli")

    logger.info(f"Logging to {log_file}" + (" (debug mode)" if debug_mode else ""))

    if len(sys.argv) < 2:
        print(USAGE)
        return 1

    command = sys.argv[1]
    commands = {"chat": _chat, "init": _init, "count": _count}
    if command not in commands:
        print(f"Unknown command: {command}")
        print(USAGE)
        return 1

    try:
        return asyncio.run(commands[command](settings))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        print(f"Configuration error: {e}")
        return 1
    except StoreError as e:
        logger.error(f"Memory store error: {e}", exc_info=True)
        print(f"Memory store error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\nShutting down...\nGoodbye!")
        return 0


def _open_store(settings: Settings) -> SQLiteMemoryStore:
    embedder = LiteLLMEmbedder(settings.embedding_model, api_key=settings.openai_api_key)
    return SQLiteMemoryStore(settings.db_path, embedder)


async def _init(settings: Settings) -> int:
    """Create data directory and brain."""
    name = settings.require_collection_name()
    store = _open_store(settings)
    try:
        await store.initialize(name)
        print(f"Brain '{name}' ready in {settings.db_path} ({await store.count()} memories)")
    finally:
        await store.close()
    return 0


async def _count(settings: Settings) -> int:
    """Print memory count and records."""
    name = settings.require_collection_name()
    store = _open_store(settings)
    try:
        await store.initialize(name)
        records = await store.list_records()
        print(f"Memory count: {len(records)}")
        for record in records:
            preview = record.text.replace("\n", " ")
            print(f"  [{record.id}] {preview[:100]}{'...' if len(preview) > 100 else ''}")
    finally:
        await store.close()
    return 0


async def _chat(settings: Settings) -> int:
    """Interactive question loop."""
    from learning_agent.agents.retriever import Retriever
    from learning_agent.agents.review import ReviewGate
    from learning_agent.agents.search import SearchAgent
    from learning_agent.core.loop import LearningLoop
    from learning_agent.interfaces.base import MessageKind
    from learning_agent.interfaces.terminal import TerminalInterface
    from learning_agent.llm.base import LLMConfig
    from learning_agent.tools.builtin import create_search_registry

    logger = get_logger("cli.chat")

    # Both checks are fatal before the loop starts
    name = settings.require_collection_name()
    config: AgentConfig = load_agent_config(settings.agent_config_path)
    logger.info(f"Agent config: model={config.model}, agent={config.agent_type}")

    interface = TerminalInterface()
    llm = LiteLLMAdapter(api_key=settings.openai_api_key)
    store = _open_store(settings)

    try:
        await store.initialize(name)
        interface.show(f"\nMemory count: {await store.count()}\n")

        tools = create_search_registry(
            llm,
            store.embedder,
            LLMConfig(model=config.model, temperature=config.search_temperature),
            serpapi_api_key=settings.serpapi_api_key,
        )
        search_agent = SearchAgent(
            llm,
            tools,
            config,
            on_retry=lambda attempt, e: interface.show(
                "\nI made a mistake. Trying again...", MessageKind.ERROR
            ),
        )
        if search_agent.retry.unbounded:
            logger.warning("Search retry is unbounded (search.max_attempts: null)")

        loop = LearningLoop(
            retriever=Retriever(store, llm, store.embedder, config),
            search_agent=search_agent,
            review_gate=ReviewGate(store, interface),
            interface=interface,
        )
        await loop.run()

    except EOFError:
        print("\n\nShutting down...")
    finally:
        await store.close()

    print("Goodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
