from typing import Optional, Protocol, Any

class Console(Protocol):
    """Abstract interface for console output."""
    def print(self, *objects: Any) -> None:
        ...

    def log(self, *objects: Any) -> None:
        ...

class ConsoleAware:
    """Base class for components that report progress to the user.

    `print` always writes when a console is attached; `log` writes only in
    verbose mode. Without a console both are no-ops, which keeps the core
    classes usable from tests and scripts.
    """
    def __init__(self, console: Optional[Console] = None, verbose: bool = False):
        self.console = console
        self.verbose = verbose

    def print(self, msg: Any) -> None:
        if self.console:
            self.console.print(msg)

    def log(self, msg: str) -> None:
        if self.console and self.verbose:
            self.console.log(msg)

    def warn(self, msg: str) -> None:
        self.print(f"[bold yellow]⚠️  {msg}[/bold yellow]")
