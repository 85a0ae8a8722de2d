from pathlib import Path
from typing import Optional, Tuple, Type, Union

from pydantic import field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from nvidia_migmanager.errors import ConfigError

DEFAULT_CONFIG_PATH = Path("/etc/nvidia-migmanager/migmanager.toml")


class Settings(BaseSettings):
    """Agent settings.

    Sources in priority order: constructor arguments, MIGMANAGER_* environment
    variables, then the TOML config file (if any).
    """

    model_config = SettingsConfigDict(env_prefix="MIGMANAGER_")

    nvidia_smi_path: str = "/usr/libexec/nvidia/tesla/bin/nvidia-smi"
    apiclient_path: str = "apiclient"
    partition_profile: str = "9,9"
    log_file: Optional[str] = None

    @field_validator("partition_profile")
    @classmethod
    def check_partition_profile(cls, v: str) -> str:
        profiles = [p.strip() for p in v.split(",")]
        if not all(profiles):
            raise ValueError(f"invalid partition profile {v!r}")
        return ",".join(profiles)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, env_settings, TomlConfigSettingsSource(settings_cls))


def load_settings(config_path: Union[str, Path] = DEFAULT_CONFIG_PATH) -> Settings:
    """Load settings, layering the TOML file at config_path under the environment.

    A missing file is ignored. Raises ConfigError if the file is malformed.
    """

    class FileSettings(Settings):
        model_config = SettingsConfigDict(toml_file=Path(config_path))

    try:
        return FileSettings()
    except (OSError, ValueError) as e:
        raise ConfigError(f"Failed to load config '{config_path}': {e}") from e
