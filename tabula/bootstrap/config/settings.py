import json
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from tabula.bootstrap.config.loader import get_configfile
from tabula.core.codec.handle import DEFAULT_UPPER_BOUND
from tabula.core.models.key import KeyMode


class StoreSettings(BaseModel):
    path: Annotated[
        Path,
        Field(
            description=(
                "Directory of the LMDB environment holding the key space.\n"
                "It is created on first write."
            ),
            default=Path("tabula-data")
        )
    ]

    keyspace: Annotated[
        str,
        Field(
            description="Name of the LMDB database the keys live in.",
            default="kv"
        )
    ]

    map_size: Annotated[
        int,
        Field(
            description="Maximum size of the LMDB memory map, in bytes.",
            default=1 << 30
        )
    ]

    max_readers: Annotated[
        int,
        Field(
            description="Number of threads serving read transactions.",
            default=4
        )
    ]


class ScanSettings(BaseModel):
    limit: Annotated[
        int,
        Field(
            description="Default maximum number of pairs returned by a scan.",
            default=20
        )
    ]

    mode: Annotated[
        KeyMode,
        Field(
            description=(
                "Default key layout of the scanned keyspace.\n"
                "raw     → keys wrapped in the chunked byte encoding.\n"
                "logical → plain table keys, as seen through transactions."
            ),
            default=KeyMode.raw
        )
    ]

    batch_size: Annotated[
        int,
        Field(
            description="Number of pairs read per storage transaction.",
            default=256
        )
    ]

    @field_validator("limit", "batch_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be a positive integer")
        return v


class InspectSettings(BaseModel):
    min_string_len: Annotated[
        int,
        Field(
            description="Shortest printable ASCII run reported from a value.",
            default=4
        )
    ]

    handle_upper_bound: Annotated[
        int,
        Field(
            description=(
                "Exclusive upper bound for a decoded integer to be reported\n"
                "as a row handle candidate."
            ),
            default=DEFAULT_UPPER_BOUND
        )
    ]


class TabulaConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TABULA_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    store: Annotated[
        StoreSettings,
        Field(
            description="Local key space storage.",
            default_factory=StoreSettings
        )
    ]

    scan: Annotated[
        ScanSettings,
        Field(
            description="Defaults applied to range scans.",
            default_factory=ScanSettings
        )
    ]

    inspect: Annotated[
        InspectSettings,
        Field(
            description="Value inspection heuristics.",
            default_factory=InspectSettings
        )
    ]

    log_level: Annotated[
        str,
        Field(
            description="Logging verbosity: DEBUG, INFO, WARNING, ERROR or CRITICAL.",
            default="WARNING"
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        configfile = get_configfile()
        if configfile is None:
            return init_settings, env_settings
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=configfile),
        )


def load_config() -> TabulaConfig:
    try:
        return TabulaConfig()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(p) for p in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))
