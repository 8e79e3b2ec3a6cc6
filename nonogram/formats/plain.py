from . import Format, register_format


@register_format
class Plain(Format):
    """One row-major line of symbols per solution."""
    name = "plain"

    def render(self, solutions, count):
        return "".join(solution.to_string() + "\n" for solution in solutions)
