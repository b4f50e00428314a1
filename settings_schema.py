from pydantic import BaseModel, ValidationError, field_validator

LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class SettingsSchema(BaseModel):
    db_path: str = "./workouts.db"
    host: str = "0.0.0.0"
    port: int = 8081
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return level

    @field_validator("port")
    @classmethod
    def _valid_port(cls, value: int) -> int:
        if not 0 < value < 65536:
            raise ValueError("port must be between 1 and 65535")
        return value


def validate_settings(data: dict) -> dict:
    """Validate ``data`` and return it with defaults and coercions applied."""
    try:
        return SettingsSchema(**data).model_dump()
    except ValidationError as e:
        raise ValueError(str(e))
