"""Runtime helper sources appended to compiled output.

Generated code calls two small JavaScript functions. Their source is
appended after the main program, at most once each, and only when the
program references them.

- `ǃmap＿(obj, each, alt)`: iterate an array-like by index or an object by
  enumerable key, calling `each(value, key)`; when nothing was produced
  and `alt` is given, return `alt()` instead.
- `ǃattrs＿(...objs)`: merge props objects applying the same key rules
  as `jaect.compiler.attributes`, at run time.

"""

from __future__ import annotations

import logging

from jaect.compiler import sentinels

logger = logging.getLogger(__name__)

EACH_HELPER_SOURCE = f"""\
function {sentinels.MAP}(obj, each, alt) {{
  var result = [], key;
  if (obj == null) {{
    result = [];
  }} else if (typeof obj.length === 'number') {{
    result = [].map.call(obj, function (value, index) {{
      return each(value, index);
    }});
  }} else {{
    for (key in obj) result.push(each(obj[key], key));
  }}
  return !alt || result.length ? result : alt();
}}"""

ATTRS_HELPER_SOURCE = f"""\
function {sentinels.ATTRS}() {{
  var classes = [];
  var attrs = {{}};
  [].slice.call(arguments).forEach(function (it) {{
    for (var key in it) {{
      var val = it[key];
      switch (key) {{
        case 'class':
        case 'className':
          if (Array.isArray(val)) {{
            classes = classes.concat(val);
          }} else if (val != null && val !== '') {{
            classes.push(val);
          }}
          continue;
        case 'for':
          key = 'htmlFor';
          break;
        default:
          if (/^data-/.test(key)) {{
            if (val == null) continue;
            if (typeof val !== 'string') val = JSON.stringify(val);
            break;
          }}
          if (/^aria-/.test(key)) break;
          key = key.split('-');
          key = key[0] + key.slice(1).map(function (part) {{
            return part.charAt(0).toUpperCase() + part.substr(1);
          }}).join('');
      }}
      attrs[key] = val;
    }}
  }});
  if (classes.length) attrs.className = classes.join(' ');
  return attrs;
}}"""


class HelperEmitter:
    """Collects helper sources for one compilation, each at most once.

    Attributes:
        has_each: Iteration helper already emitted.
        has_attrs: Attribute-merge helper already emitted.
        sources: Emitted helper sources in first-use order.

    Example:
        >>> helpers = HelperEmitter()
        >>> helpers.use_each() == helpers.use_each()
        True
        >>> len(helpers.sources)
        1
    """

    __slots__ = ("has_attrs", "has_each", "sources")

    def __init__(self) -> None:
        self.has_each = False
        self.has_attrs = False
        self.sources: list[str] = []

    def use_each(self) -> str:
        """Reference the iteration helper; returns its name."""
        if not self.has_each:
            logger.debug("Emitting iteration helper")
            self.sources.append(EACH_HELPER_SOURCE)
            self.has_each = True
        return sentinels.MAP

    def use_attrs(self) -> str:
        """Reference the attribute-merge helper; returns its name."""
        if not self.has_attrs:
            logger.debug("Emitting attribute-merge helper")
            self.sources.append(ATTRS_HELPER_SOURCE)
            self.has_attrs = True
        return sentinels.ATTRS
