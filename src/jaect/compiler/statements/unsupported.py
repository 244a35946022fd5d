"""Rejection of node variants the generator does not support.

Doctypes, mixins and filters have no meaning for a component render
function. Visiting one aborts the whole compilation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

from jaect.exceptions import UnsupportedConstructError

if TYPE_CHECKING:
    from jaect.nodes import Doctype, Filter, Mixin


class UnsupportedMixin:
    """Mixin raising `UnsupportedConstructError` for rejected variants."""

    def _visit_doctype(self, node: Doctype) -> NoReturn:
        raise UnsupportedConstructError("Doctype", node.lineno)

    def _visit_mixin(self, node: Mixin) -> NoReturn:
        raise UnsupportedConstructError("Mixin", node.lineno)

    def _visit_filter(self, node: Filter) -> NoReturn:
        raise UnsupportedConstructError("Filter", node.lineno)
