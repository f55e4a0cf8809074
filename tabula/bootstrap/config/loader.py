import os
from pathlib import Path

CONFIG_ENV = "TABULA_CONFIG"
DEFAULT_CONFIG_NAME = "tabula.yaml"


def get_configfile() -> Path | None:
    # Priority: ENV > default file in current working directory
    raw = os.getenv(CONFIG_ENV)

    if raw is None:
        file = Path.cwd() / DEFAULT_CONFIG_NAME
        return file if file.is_file() else None

    file = Path(raw).expanduser()
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            f"  - Or set the {CONFIG_ENV} environment variable\n"
            f"  - Or place a '{DEFAULT_CONFIG_NAME}' file in the current working directory."
        )

    return file
