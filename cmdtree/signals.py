# Cmdtree Command Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines flow control signals used by hosts embedding the Cmdtree dispatcher.

These signals are raised to interrupt or redirect the host's execution flow
(e.g., quitting an interactive shell) without being treated as traditional
exceptions. The dispatcher never wraps them: a handler raising a signal
reaches the host unchanged.

All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass standard `except Exception` blocks.

Signals:
- QuitSignal: Terminate the interactive session.
- CancelSignal: Cancel the current command.
"""


class FlowSignal(BaseException):
    """Base class for all flow control signals in Cmdtree.

    These are not errors. They're used to control flow like quitting
    or cancelling from inside a command handler.
    """


class QuitSignal(FlowSignal):
    """Raised to signal an immediate exit from the interactive shell."""

    def __init__(self, message: str = "Quit signal received."):
        super().__init__(message)


class CancelSignal(FlowSignal):
    """Raised to cancel the current command."""

    def __init__(self, message: str = "Cancel signal received."):
        super().__init__(message)
