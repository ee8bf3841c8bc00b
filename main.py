import asyncio
import sys
import threading
import time

from config.config import Config
from models.errors import (
    ConfigurationError,
    ModelGatewayError,
    QueryValidationError,
    SchemaRepairExhaustedError,
)
from orchestrator.core import SearchPipeline, create_pipeline


def show_loading_animation(stop_event: threading.Event) -> None:
    """
    Show a loading animation in the console.

    Args:
        stop_event: A threading.Event that will be set to stop the animation
    """
    while not stop_event.is_set():
        for char in '|/-\\':
            if stop_event.is_set():
                break
            sys.stdout.write(f'\r\033[93mSearching {char}\033[0m')
            sys.stdout.flush()
            time.sleep(0.1)

    # Clear the loading line
    sys.stdout.write('\r' + ' ' * 20 + '\r')
    sys.stdout.flush()


def print_answer(ctx) -> None:
    print(f"\n[{ctx.mode.value}] {ctx.answer.answer}")
    if ctx.answer.sources:
        print("\nSources:")
        for idx, url in enumerate(ctx.answer.sources, start=1):
            print(f"  [{idx}] {url}")
    print()


def ask(pipeline: SearchPipeline, query: str) -> bool:
    """Run one query with a spinner. Returns False when the query failed."""
    stop_animation = threading.Event()
    animation_thread = threading.Thread(target=show_loading_animation, args=(stop_animation,))
    animation_thread.daemon = True
    animation_thread.start()

    try:
        ctx = asyncio.run(pipeline.run(query))
    except QueryValidationError as e:
        error = e.message
    except SchemaRepairExhaustedError:
        error = "The model returned an answer in an unusable format. Please try again."
    except ModelGatewayError as e:
        error = f"The language model is unavailable ({e.error.code})."
    else:
        error = None
    finally:
        stop_animation.set()
        animation_thread.join()

    if error:
        print(f"\nError: {error}\n")
        return False

    print_answer(ctx)
    return True


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv

    try:
        config = Config().validate()
        pipeline = create_pipeline(config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}")
        return 1

    # One-shot mode: the arguments are the query
    if argv:
        return 0 if ask(pipeline, " ".join(argv)) else 1

    print("\n=== Grounded Search ===")
    print(f"Model: {config.get_model_info()}")
    print("Type 'exit' to quit or 'help' for commands\n")

    while True:
        try:
            user_input = input("Query: ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye!")
            break

        if not user_input:
            continue

        if user_input.lower() in ('exit', 'quit'):
            print("\nGoodbye!")
            break

        if user_input.lower() == 'help':
            print("\n=== Available Commands ===")
            print("help      - Show this help message")
            print("exit/quit - Exit the program")
            print("Anything else is answered directly or from web sources.\n")
            continue

        ask(pipeline, user_input)

    return 0


if __name__ == "__main__":
    sys.exit(main())
