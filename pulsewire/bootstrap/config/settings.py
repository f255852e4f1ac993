from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from pulsewire.bootstrap.config.loader import get_configfile


class ConnectionSettings(BaseModel):
    server: Annotated[
        Path,
        Field(
            description=(
                "Path of the PulseAudio native protocol UNIX socket,\n"
                "e.g. /run/user/1000/pulse/native.\n"
                "The socket is used as given; no server discovery is performed."
            )
        )
    ]

    timeout: Annotated[
        float | None,
        Field(
            description=(
                "Socket timeout in seconds applied to every send and receive.\n"
                "None blocks indefinitely. A timeout aborts the current request."
            ),
            default=None,
            gt=0
        )
    ]

    max_frame_size: Annotated[
        int,
        Field(
            description="Largest packet accepted from the server, in bytes.",
            default=16 * 1024 * 1024,
            gt=0
        )
    ]


class PulseWireConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="PULSEWIRE_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    connection: Annotated[
        ConnectionSettings,
        Field(
            description=(
                "Connection to the PulseAudio server.\n"
                "Controls which socket is opened and the limits applied to it."
            )
        )
    ]

    log_level: Annotated[
        Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        Field(
            description="Logging verbosity.",
            default="INFO"
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
        return init_settings, env_settings, YamlConfigSettingsSource(settings_cls, yaml_file=configfile)
