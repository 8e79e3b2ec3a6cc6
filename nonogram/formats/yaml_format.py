import yaml

from . import Format, register_format


@register_format
class Yaml(Format):
    name = "yaml"

    def render(self, solutions, count):
        data = {
            "count": count,
            "solutions": [solution.to_lines() for solution in solutions],
        }
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
