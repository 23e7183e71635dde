"""
cli.py - command line interface for the news autocompleter
Features:
- serve: run the suggestion web service (uvicorn)
- query: one-shot suggestions, shown with their source in a Rich table
- shell: interactive prompt with live suggestions
- stats / bench: dictionary size and suggest() latency
"""

import argparse
import statistics
import time
from random import choice
from typing import List, Optional, Tuple

# ui styling with Rich
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from news_autocompleter.core.merger import SuggestionMerger
from news_autocompleter.core.title_store import InMemoryTitleStore, MongoTitleStore
from news_autocompleter.core.trie import DictionaryIndex
from news_autocompleter.utils.config_manager import Config
from news_autocompleter.utils.logger_utils import log

# initialise console for rich output
console = Console()

SOURCE_STYLE = {"dictionary": "cyan", "title": "magenta"}
BENCH_QUERIES = ["the", "new", "pol", "tech", "sport", "bus", "wor", "ele"]


def _load_config(args) -> Config:
    cfg = Config(args.config)
    if args.word_list:
        cfg.data["word_list"] = args.word_list  # this run only, not saved
    log.level = cfg["log_level"]
    return cfg


def _build_merger(args, cfg: Config) -> SuggestionMerger:
    """Dictionary from the configured word list, titles from a file, MongoDB or nowhere."""
    index = DictionaryIndex.from_file(cfg["word_list"])
    if args.no_store:
        store = None
    elif args.titles_file:
        store = InMemoryTitleStore.from_file(args.titles_file)
    else:
        store = MongoTitleStore.from_uri(
            cfg["mongo_uri"],
            collection=cfg["title_collection"],
            field=cfg["title_field"],
            timeout_s=cfg["title_timeout_s"],
        )
    return SuggestionMerger.from_config(cfg, index, store)


def display_suggestions(query: str, suggestions: List[Tuple[str, str]]) -> None:
    """Display suggestions in a color-coded table."""
    if not suggestions:
        console.print(f"[dim](no suggestions for {escape(repr(query))})[/dim]")
        return
    table = Table(title=f"Suggestions for '{escape(query)}'", box=box.SIMPLE)
    table.add_column("#", justify="right", style="bold")
    table.add_column("Suggestion")
    table.add_column("Source")
    for i, (text, source) in enumerate(suggestions, start=1):
        style = SOURCE_STYLE.get(source, "white")
        table.add_row(str(i), f"[{style}]{escape(text)}[/{style}]", source)
    console.print(table)


class Shell:
    """Interactive loop: type a query, see suggestions. /help for commands."""

    def __init__(self, merger: SuggestionMerger):
        self.merger = merger
        self.timings: List[float] = []
        self.running = True

    def run(self):
        console.rule("[bold magenta]News Autocompleter[/bold magenta]")
        console.print("Commands: /help /stats /quit\n")
        while self.running:
            try:
                line = Prompt.ask("[green]search[/green]", default="")
            except (EOFError, KeyboardInterrupt):
                break
            if line.startswith("/"):
                self._handle_command(line.strip())
                continue
            if not line.strip():
                continue
            t0 = time.perf_counter()
            out = self.merger.suggest_with_sources(line)
            self.timings.append(time.perf_counter() - t0)
            display_suggestions(line.strip(), out)
        console.print("bye.")

    def _handle_command(self, cmd: str):
        if cmd in ("/q", "/quit", "/exit"):
            self.running = False
        elif cmd == "/help":
            console.print("type a prefix to see suggestions; /stats, /quit")
        elif cmd == "/stats":
            if not self.timings:
                console.print("[dim]no queries yet[/dim]")
                return
            avg = statistics.mean(self.timings) * 1000
            console.print(f"queries: {len(self.timings)}  avg latency: {avg:.2f} ms")
        else:
            console.print(f"[red]Unknown command:[/red] {cmd}")


# subcommands ------------------------------------------------------------
def cmd_serve(args) -> int:
    import uvicorn

    from news_autocompleter.api.server import create_app

    cfg = _load_config(args)
    app = create_app(cfg)
    uvicorn.run(app, host=args.host or cfg["host"], port=args.port or cfg["port"])
    return 0


def cmd_query(args) -> int:
    cfg = _load_config(args)
    merger = _build_merger(args, cfg)
    try:
        display_suggestions(args.text.strip(), merger.suggest_with_sources(args.text))
    finally:
        merger.close()
    return 0


def cmd_shell(args) -> int:
    cfg = _load_config(args)
    merger = _build_merger(args, cfg)
    try:
        Shell(merger).run()
    finally:
        merger.close()
    return 0


def cmd_stats(args) -> int:
    cfg = _load_config(args)
    t0 = time.perf_counter()
    index = DictionaryIndex.from_file(cfg["word_list"])
    dt = time.perf_counter() - t0
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_row("word list", cfg["word_list"])
    table.add_row("words", str(len(index)))
    table.add_row("build time", f"{dt * 1000:.1f} ms")
    console.print(table)
    return 0


def cmd_bench(args) -> int:
    cfg = _load_config(args)
    merger = _build_merger(args, cfg)
    latencies = []
    try:
        for _ in range(max(1, args.iters)):
            t0 = time.perf_counter()
            merger.suggest(choice(BENCH_QUERIES))
            latencies.append((time.perf_counter() - t0) * 1000.0)
    finally:
        merger.close()
    console.print(
        "bench (ms): mean=%.3f median=%.3f min=%.3f max=%.3f over %d calls"
        % (
            statistics.mean(latencies),
            statistics.median(latencies),
            min(latencies),
            max(latencies),
            len(latencies),
        )
    )
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="news-suggest", description="News search autocompleter")
    parser.add_argument("--config", default=None, help="JSON config file")
    parser.add_argument("--word-list", default=None, help="dictionary word list (one word per line)")
    parser.add_argument("--titles-file", default=None, help="use titles from this file instead of MongoDB")
    parser.add_argument("--no-store", action="store_true", help="dictionary suggestions only")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("serve", help="run the HTTP service")
    p.add_argument("--host", default=None)
    p.add_argument("--port", type=int, default=None)
    p.set_defaults(func=cmd_serve)

    p = sub.add_parser("query", help="print suggestions for TEXT")
    p.add_argument("text")
    p.set_defaults(func=cmd_query)

    p = sub.add_parser("shell", help="interactive suggestions")
    p.set_defaults(func=cmd_shell)

    p = sub.add_parser("stats", help="dictionary statistics")
    p.set_defaults(func=cmd_stats)

    p = sub.add_parser("bench", help="measure suggest() latency")
    p.add_argument("--iters", type=int, default=200, help="measured iterations")
    p.set_defaults(func=cmd_bench)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
