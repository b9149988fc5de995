"""
Terminal host for the course/professor search bar.

Run:
    python app/app.py

Each line typed is treated as the full current value of the search input
(as if typed keystroke by keystroke); suggestions are fetched from
SUGGEST_API_BASE + /api/courses/search after the debounce window and
printed as they arrive. Commands:

    :enter     press Enter (select the top suggestion)
    :<n>       click the n-th suggestion (1-based)
    :clear     the page resets initial_value to ""
    :quit      tear down and exit

Navigation is logged instead of routed. Logs go to stdout and logs/app.log
(rotating, 5 MB max, 3 backups).
"""

import asyncio
import logging
import logging.handlers
import sys
from pathlib import Path

from dotenv import load_dotenv

# Ensure project root is on sys.path when running as a script (python app/app.py)
sys.path.insert(0, str(Path(__file__).parent.parent))

from suggest.config import Settings, load_settings
from suggest.models import SearchState
from suggest.search_bar import SearchBar

LOG_DIR  = Path(__file__).parent.parent / "logs"
LOG_FILE = LOG_DIR / "app.log"

log = logging.getLogger("app")


def _setup_logging(level: str = "INFO") -> None:
    LOG_DIR.mkdir(exist_ok=True)
    fmt = logging.Formatter("%(asctime)s  %(levelname)s  %(message)s")

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(fmt)

    # Rotate at 5 MB, keep 3 backups
    rotating = logging.handlers.RotatingFileHandler(
        LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    rotating.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(stream)
    root.addHandler(rotating)


# ---------------------------------------------------------------------------
# Rendering + routing stand-ins
# ---------------------------------------------------------------------------

def render(state: SearchState) -> None:
    if state.show_loading_placeholder:
        print("  …")
        return
    for i, s in enumerate(state.visible_suggestions, start=1):
        print(f"  {i:>2}. {s.text}  [{s.category.value}]")


class LoggingRouter:
    """Records where the search bar asked to go."""

    def __init__(self):
        self.history: list[str] = []

    def push(self, url: str) -> None:
        self.history.append(url)
        print(f"→ {url}")


# ---------------------------------------------------------------------------
# Input loop
# ---------------------------------------------------------------------------

def _handle_command(bar: SearchBar, line: str) -> bool:
    """Apply one ':' command; returns False when the loop should stop."""
    cmd = line[1:].strip().lower()

    if cmd == "quit":
        return False
    if cmd == "enter":
        if not bar.on_key("Enter"):
            print("  (no suggestions)")
    elif cmd == "clear":
        bar.set_initial_value("")
    elif cmd.isdigit():
        suggestions = bar.state.suggestions
        index = int(cmd) - 1
        if 0 <= index < len(suggestions):
            bar.select(suggestions[index])
        else:
            print(f"  (no suggestion #{cmd})")
    else:
        print(f"  (unknown command {line!r})")
    return True


async def run(settings: Settings) -> list[str]:
    router = LoggingRouter()

    def reset_state() -> None:
        log.info("Caller state reset.")

    async with SearchBar(navigate=router.push, reset_state=reset_state, settings=settings) as bar:
        bar.subscribe(render)
        print("Search for a course or professor (:enter, :<n>, :clear, :quit)")

        while True:
            line = await asyncio.to_thread(sys.stdin.readline)
            if not line:
                break
            line = line.rstrip("\n")
            if line.startswith(":"):
                if not _handle_command(bar, line):
                    break
            else:
                bar.on_input(line)

    return router.history


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main() -> None:
    load_dotenv()
    settings = load_settings()
    _setup_logging(settings.log_level)

    log.info("=== Course search bar: querying %s%s ===", settings.api_base, settings.search_path)
    history = asyncio.run(run(settings))
    log.info("=== Done, %d navigation(s) ===", len(history))


if __name__ == "__main__":
    main()
