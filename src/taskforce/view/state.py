# SPDX-License-Identifier: MIT

"""Report display toggles set once per invocation from config and global options."""

from contextvars import ContextVar

_show_header_var: ContextVar[bool] = ContextVar("show_header", default=True)

# Long table columns are truncated with an ellipsis instead of wrapped
_no_wrap_var: ContextVar[bool] = ContextVar("no_wrap", default=False)


def set_show_header(value: bool) -> None:
    _show_header_var.set(value)


def get_show_header() -> bool:
    return _show_header_var.get()


def set_no_wrap(value: bool) -> None:
    _no_wrap_var.set(value)


def get_no_wrap() -> bool:
    return _no_wrap_var.get()


def reset_view_state() -> None:
    """Restore the defaults: headers shown, columns wrapped."""
    set_show_header(True)
    set_no_wrap(False)
