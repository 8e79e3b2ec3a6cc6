from . import Format, register_format


@register_format
class Grid(Format):
    name = "grid"

    def render(self, solutions, count):
        blocks = [f"Solutions: {count}"]
        for number, solution in enumerate(solutions, start=1):
            blocks.append("\n".join([f"Solution {number}:"] + solution.to_lines()))
        return "\n\n".join(blocks) + "\n"
