"""CLI entry point for Yuchi."""

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from yuchi import __version__, commands
from yuchi.errors import YuchiError
from yuchi.ui import display_error, display_help


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="yuchi",
        description="Yuchi CLI - A command-line assistant powered by ShapesAI",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--image",
        metavar="IMAGE_PATH",
        help="Path to an image file (PNG/JPEG) to send to the AI",
    )
    parser.add_argument(
        "--model",
        help="Override the model for this question",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Reset the AI conversation history (sends '!reset' to AI)",
    )
    parser.add_argument(
        "--wack",
        action="store_true",
        help="Clear the AI's short-term memory (sends '!wack' to AI)",
    )
    parser.add_argument(
        "--sleep",
        action="store_true",
        help="Save the current conversation state",
    )
    parser.add_argument(
        "--login",
        action="store_true",
        help="Authenticate with ShapesAI",
    )
    parser.add_argument(
        "--logout",
        action="store_true",
        help="Clear stored credentials and configuration",
    )
    parser.add_argument(
        "--shape",
        metavar="USERNAME",
        help="Set a ShapesAI username to use a custom model (shapesinc/<username>)",
    )
    parser.add_argument(
        "--imagine",
        action="store_true",
        help="Generate an image and download it (appends '!imagine' to the prompt)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log requests and tool execution to stderr",
    )
    parser.add_argument(
        "question",
        nargs="*",
        metavar="QUESTION",
        help="Question to ask",
    )
    return parser


def setup_logging(verbose: bool, console: Console) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    # Keep the HTTP stack quiet unless asked
    for name in ("httpx", "httpcore", "openai"):
        logging.getLogger(name).setLevel(logging.DEBUG if verbose else logging.WARNING)


def run(args: argparse.Namespace, console: Console) -> None:
    # Non-AI flags
    if args.login:
        commands.login(console)
        return
    if args.logout:
        commands.logout(console)
        return
    if args.shape:
        commands.set_shape(args.shape, console)
        return
    if args.sleep:
        console.print("Saving conversation state...")
        return

    prompt = " ".join(args.question)

    if args.imagine:
        final_prompt = f"{prompt} !imagine" if prompt else "!imagine"
        reply = commands.ask(final_prompt, args.model, args.image, console)
        commands.download_image(reply, console=console)
    elif args.reset:
        commands.ask("!reset", args.model, None, console)
    elif args.wack:
        commands.ask("!wack", args.model, None, console)
    elif prompt:
        commands.ask(prompt, args.model, args.image, console)
    else:
        display_help(console)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    console = Console()
    err_console = Console(stderr=True)
    setup_logging(args.verbose, err_console)

    try:
        run(args, console)
    except YuchiError as e:
        logging.getLogger(__name__).debug("Command failed", exc_info=True)
        display_error(e, err_console)
        return 1
    except KeyboardInterrupt:
        err_console.print("\n[dim]Goodbye![/dim]")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
