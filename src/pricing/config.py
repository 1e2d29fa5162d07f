"""
PricingConfig — настраиваемые константы оценщика, агрегатора и блендера

Все константы собраны в одном immutable объекте, чтобы их можно было
перенастроить без изменения кода: через dict, TOML файл ([pricing] table)
или переменные окружения FAIRPRICE_<FIELD>.

Ошибки конфигурации поднимают ValueError (в отличие от ошибок данных,
которые никогда не поднимаются).
"""

import os
import tomllib
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Final, Mapping, Optional

from src.core.math.decay import DAYS_PER_MONTH, DECAY_ALPHA, HALF_LIFE_MONTHS
from src.core.math.numerical_safeguards import validate_positive

# =============================================================================
# ПАРАМЕТРЫ ПО УМОЛЧАНИЮ
# =============================================================================

# Ширина winsorization в σ: цены клипуются в [μ0 − 2.5σ0, μ0 + 2.5σ0]
CLIP_SIGMA: Final[float] = 2.5

# Нижняя граница σ0 (одинаковые цены не дают нулевой ширины клипа)
SIGMA_FLOOR: Final[float] = 1.0

# Минимальный размер выборки для любой оценки
MIN_SAMPLE_SIZE: Final[int] = 3

# Базовое доверие к источникам
BASE_TRUST_QUOTES: Final[float] = 1.0
BASE_TRUST_COMMUNITY: Final[float] = 0.8

# Saturation constant: при n == k фактор n/(n+k) равен 1/2
SATURATION_K: Final[float] = 5.0

# Префикс переменных окружения
ENV_PREFIX: Final[str] = "FAIRPRICE_"


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class PricingConfig:
    """Конфигурация ценового ядра."""

    # Decayed Robust Estimator
    decay_alpha: float = DECAY_ALPHA
    half_life_months: float = HALF_LIFE_MONTHS
    days_per_month: float = DAYS_PER_MONTH
    clip_sigma: float = CLIP_SIGMA
    sigma_floor: float = SIGMA_FLOOR

    # Общий порог выборки
    min_sample_size: int = MIN_SAMPLE_SIZE

    # Price Blender
    base_trust_quotes: float = BASE_TRUST_QUOTES
    base_trust_community: float = BASE_TRUST_COMMUNITY
    saturation_k: float = SATURATION_K

    def __post_init__(self) -> None:
        for name in (
            "decay_alpha",
            "half_life_months",
            "days_per_month",
            "clip_sigma",
            "sigma_floor",
            "base_trust_quotes",
            "base_trust_community",
            "saturation_k",
        ):
            validate_positive(getattr(self, name), name)

        if isinstance(self.min_sample_size, bool) or not isinstance(self.min_sample_size, int):
            raise ValueError(
                f"min_sample_size must be an integer, got {self.min_sample_size!r}"
            )
        if self.min_sample_size < 1:
            raise ValueError(f"min_sample_size must be >= 1, got {self.min_sample_size}")

    @property
    def effective_half_life_months(self) -> float:
        """Возраст, при котором вес котировки падает вдвое (≈1.67 мес. по умолчанию)."""
        return self.half_life_months / self.decay_alpha

    @classmethod
    def from_dict(cls, config_dict: Mapping[str, Any]) -> "PricingConfig":
        """
        Создание конфигурации из dict.

        Raises:
            ValueError: Неизвестные ключи или невалидные значения
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ValueError(f"Unknown pricing config keys: {', '.join(unknown)}")
        return cls(**dict(config_dict))

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def replace(self, **updates: Any) -> "PricingConfig":
        """Копия с изменёнными полями (валидация выполняется заново)."""
        merged = self.to_dict()
        merged.update(updates)
        return PricingConfig.from_dict(merged)


DEFAULT_CONFIG: Final[PricingConfig] = PricingConfig()


# =============================================================================
# LOADERS
# =============================================================================


def load_config_from_env(environ: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
    """
    Переопределения из переменных окружения FAIRPRICE_<FIELD>.

    Пример: FAIRPRICE_CLIP_SIGMA=3.0, FAIRPRICE_MIN_SAMPLE_SIZE=5

    Raises:
        ValueError: Значение не приводится к числу
    """
    env = os.environ if environ is None else environ
    overrides: dict[str, Any] = {}

    for f in fields(PricingConfig):
        raw = env.get(f"{ENV_PREFIX}{f.name.upper()}")
        if raw is None:
            continue
        try:
            overrides[f.name] = int(raw) if f.name == "min_sample_size" else float(raw)
        except ValueError:
            raise ValueError(
                f"{ENV_PREFIX}{f.name.upper()} must be numeric, got {raw!r}"
            ) from None

    return overrides


def load_pricing_config(
    path: Optional[Path] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> PricingConfig:
    """
    Загрузка конфигурации: TOML файл ([pricing] table) + env поверх.

    Отсутствующий файл — не ошибка, используются значения по умолчанию.

    Raises:
        ValueError: Файл не является валидным TOML или значения невалидны
    """
    config_dict: dict[str, Any] = {}

    if path is not None and Path(path).exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Invalid pricing config file {path}: {e}") from e
        config_dict.update(data.get("pricing", {}))

    config_dict.update(load_config_from_env(environ))
    return DEFAULT_CONFIG.replace(**config_dict)
