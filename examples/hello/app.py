"""Hello World -- the simplest jaect example.

Build a tree for `p Hello, #{name}!` by hand and compile it to a
React render function.

Run:
    python app.py
"""

from jaect import Transform
from jaect.nodes import Block, Tag, Text

tree = Block([Tag("p", block=Block([Text("Hello, #{name}!")]))])

transform = Transform(tree)

# Plain output, four-space indentation
output = transform.compile()


def main() -> None:
    print(transform.generate())
    print(output)
    print()

    # Same tree, other output modes (generation is not repeated)
    print(transform.compile(beautify=True))
    print(transform.compile(minify=True))


if __name__ == "__main__":
    main()
