"""Todo list -- each/else, case/when, attribute spreads and helpers.

Loads a parser-produced tree from trees/todo.json and compiles it in
all three output modes. The iteration and attribute-merge helpers are
appended after the render function.

Run:
    python app.py
"""

import json
import logging
from pathlib import Path

from jaect import Transform, load_tree

logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

tree_path = Path(__file__).parent / "trees" / "todo.json"
tree = load_tree(json.loads(tree_path.read_text()))

transform = Transform(tree)
output = transform.compile()
minified = transform.compile(minify=True)


def main() -> None:
    print(output)
    print()
    print(minified)


if __name__ == "__main__":
    main()
