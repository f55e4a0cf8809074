import json

import yaml

from tabctl.core.ports.render import Renderer
from tabula.core.helpers.utils import bytes_to_hex


def normalize(obj):
    """Make a reply tree printable: bytes become space separated hex."""
    if isinstance(obj, bytes):
        return bytes_to_hex(obj)

    if isinstance(obj, dict):
        return {normalize(k): normalize(v) for k, v in obj.items()}

    if isinstance(obj, (list, tuple)):
        return [normalize(x) for x in obj]

    return obj


class JsonRenderer(Renderer):
    def render(self, data: dict) -> str:
        return json.dumps(normalize(data), indent=2, sort_keys=False)


class YamlRenderer(Renderer):
    def render(self, data: dict) -> str:
        return yaml.safe_dump(normalize(data), sort_keys=False)


RENDERERS: dict[str, type[Renderer]] = {
    "yaml": YamlRenderer,
    "json": JsonRenderer,
}
