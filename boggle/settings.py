import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)

    MIN_WORD_LENGTH: int = 3
    MAX_RESULTS: int = 50
    BOARD_IMAGE_CELL_SIZE: int = 80

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False
    PORT: int = 10001

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                setattr(self, fld, _coerce(getattr(self, fld), env_val))


# Fields that may be changed at runtime through /api/settings
EDITABLE_FIELDS: dict[str, type] = {
    "MIN_WORD_LENGTH": int,
    "MAX_RESULTS": int,
    "BOARD_IMAGE_CELL_SIZE": int,
    "LOG_LEVEL": str,
    "DEBUG": bool,
}

_MINIMUMS = {
    "MIN_WORD_LENGTH": 1,
    "MAX_RESULTS": 0,
    "BOARD_IMAGE_CELL_SIZE": 16,
}

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _coerce(current, raw):
    if isinstance(current, bool):
        if isinstance(raw, bool):
            return raw
        return str(raw).lower() in ("1", "true", "yes")
    if isinstance(current, int):
        return int(raw)
    if isinstance(current, float):
        return float(raw)
    if isinstance(current, Path):
        return Path(raw)
    return str(raw)


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def update_settings(cfg: Settings, **values) -> dict[str, str]:
    """Apply editable fields in ``values``; returns an error message per rejected field."""
    errors: dict[str, str] = {}
    for name, raw in values.items():
        if name not in EDITABLE_FIELDS:
            errors[name] = "not an editable setting"
            continue
        expected = EDITABLE_FIELDS[name]
        if expected is int and isinstance(raw, bool):
            errors[name] = "expected int"
            continue
        try:
            value = _coerce(getattr(cfg, name), raw)
        except (TypeError, ValueError):
            errors[name] = f"expected {expected.__name__}"
            continue
        if name == "LOG_LEVEL":
            value = value.upper()
            if value not in _LOG_LEVELS:
                errors[name] = f"must be one of {', '.join(_LOG_LEVELS)}"
                continue
        minimum = _MINIMUMS.get(name)
        if minimum is not None and value < minimum:
            errors[name] = f"must be >= {minimum}"
            continue
        setattr(cfg, name, value)
    return errors


settings = Settings()
