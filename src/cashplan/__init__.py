"""cashplan: 90-day multi-currency cash-flow planning."""

__version__ = "0.1.0"


# The CLI pulls in every layer, so expose it lazily
def __getattr__(name):
    if name == "main":
        from cashplan.cli.main import main
        return main
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
