"""Node generation for the jaect compiler.

Provides mixins that turn template nodes into intermediate JavaScript
source appended to the `CompilationState` buffer.

The statements package is organized into logical modules:
- elements: tags, text, literals, comments
- control_flow: code, case/when, each, mixin block
- unsupported: doctype, mixin, filter (always rejected)

Uses inline TYPE_CHECKING declarations for host attributes.

"""

from __future__ import annotations

from jaect.compiler.statements.control_flow import ControlFlowMixin
from jaect.compiler.statements.elements import ElementMixin
from jaect.compiler.statements.unsupported import UnsupportedMixin


class StatementCompilationMixin(
    ElementMixin,
    ControlFlowMixin,
    UnsupportedMixin,
):
    """Combined mixin for generating all node types.

    This class combines all generation mixins into a single interface
    that is inherited by the Transform class.

    """
